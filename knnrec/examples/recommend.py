"""
Compute row similarities for a rating matrix stored as delimited text
and print recommendations as tsv of the form: row, item, recommender,
similarity.  Only recommendations for the row given with --row are
printed if it is supplied, along with its nearest neighbours.
"""

def output(row_id,recs):
    for item_id,recommender_id,similarity in recs:
        print('{0}\t{1}\t{2}\t{3:.3f}'.format(row_id,item_id,recommender_id,similarity))

def main(argv=None):

    import asyncio
    import logging
    from optparse import OptionParser

    from knnrec import load_recommender, RecommendationOptions
    from knnrec.scheduler import CHUNK_SIZE

    logging.basicConfig(level=logging.INFO,format='[%(asctime)s] %(levelname)s: %(message)s')

    parser = OptionParser()
    parser.add_option('--dataset',dest='dataset',help='path to rating matrix, header line first then one line per row')
    parser.add_option('--delimiter',dest='delimiter',default=',',help='input delimiter (default: %default)')
    parser.add_option('--row',dest='row',help='only recommend for this row id')
    parser.add_option('--num_neighbours',dest='num_neighbours',type='int',default=3,help='number of nearest neighbours to draw recommendations from (default: %default)')
    parser.add_option('--max_items',dest='max_items',type='int',default=10,help='max recommendations to output for each row (default: %default)')
    parser.add_option('--unique',dest='unique',action='store_true',default=False,help='recommend each item at most once')
    parser.add_option('--exclude',dest='exclude',default='',help='comma-separated list of item ids never to recommend')
    parser.add_option('--chunk_size',dest='chunk_size',type='int',default=CHUNK_SIZE,help='rows computed between yields to the event loop (default: %default)')

    (opts,args) = parser.parse_args(argv)
    if not opts.dataset:
        parser.print_help()
        raise SystemExit

    logging.info('loading {0}...'.format(opts.dataset))
    model = load_recommender(opts.dataset,delimiter=opts.delimiter,chunk_size=opts.chunk_size)
    logging.info('%d rows and %d items', model.matrix.num_rows, model.matrix.num_columns)

    options = RecommendationOptions(desired_count=opts.max_items,
                                    neighbours_to_use=opts.num_neighbours,
                                    unique=opts.unique,
                                    excluded_items=[i for i in opts.exclude.split(',') if i])

    if opts.row:
        model.initialize_for_row(opts.row)
        for other_id,similarity in model.get_nearest_neighbours(opts.row,opts.num_neighbours):
            logging.info('neighbour %s: %.3f', other_id, similarity)
        output(opts.row,model.recommend_items(opts.row,options))
    else:
        asyncio.run(model.initialize())
        for row_id,recs in model.batch_recommend_items(options).items():
            output(row_id,recs)

if __name__ == '__main__':
    main()
