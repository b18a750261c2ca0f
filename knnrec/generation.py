"""
Generate recommendations for a row from what its nearest neighbours liked.
"""

import numbers
from collections import namedtuple

from .errors import RowIdNotFoundError

Recommendation = namedtuple('Recommendation',['item_id','recommender_id','similarity'])

class RecommendationOptions(object):
    """
    Settings for generate_recommendations().

    Parameters
    ----------
    desired_count : int (default: 1)
        Maximum number of recommendations to return.
    neighbours_to_use : int or None (default: 3)
        Number of nearest neighbours to draw recommendations from,
        or None to use every neighbour.
    unique : bool (default: False)
        If true recommend each item at most once, otherwise an item is
        recommended once by each neighbour that liked it.
    excluded_items : iterable of str, optional
        Column identifiers that must never be recommended.
    """

    def __init__(self,desired_count=1,neighbours_to_use=3,unique=False,excluded_items=()):
        if isinstance(desired_count,bool) or not isinstance(desired_count,numbers.Integral) or desired_count < 1:
            raise ValueError('desired_count must be a positive integer, got {0!r}'.format(desired_count))
        if neighbours_to_use is not None and \
                (isinstance(neighbours_to_use,bool) or not isinstance(neighbours_to_use,numbers.Integral) or neighbours_to_use < 1):
            raise ValueError('neighbours_to_use must be a positive integer or None, got {0!r}'.format(neighbours_to_use))
        if isinstance(excluded_items,str):
            raise ValueError('excluded_items must be a collection of item ids, not a string')
        self.desired_count = desired_count
        self.neighbours_to_use = neighbours_to_use
        self.unique = bool(unique)
        self.excluded_items = frozenset(excluded_items)

    def __repr__(self):
        return 'RecommendationOptions(desired_count={0},neighbours_to_use={1},unique={2},excluded_items={3})'.format(
            self.desired_count,self.neighbours_to_use,self.unique,sorted(self.excluded_items))

def find_row(matrix,row_index,row_id):
    """
    Return the matrix row for row_id, using the row index when it is
    current and falling back to scanning the matrix.
    """
    i = row_index.index_of(row_id)
    if i is None or i >= len(matrix) or matrix.row(i)[0] != row_id:
        i = matrix.find_row(row_id)
        if i is None:
            raise RowIdNotFoundError(row_id)
    return matrix.row(i)

def generate_recommendations(engine,row_id,options=None):
    """
    Walk the nearest neighbours of a row, best first, and recommend
    every item a neighbour liked that the row has not rated.

    Results come in neighbour order and, for each neighbour, in column
    order.  The walk stops as soon as options.desired_count
    recommendations have been found, otherwise all of the selected
    neighbours are used and fewer (possibly zero) are returned.

    Parameters
    ----------
    engine : knnrec.similarity.engine.SimilarityEngine
        Engine holding the computed neighbour lists.
    row_id : str
        Identifier of the row to recommend for.
    options : RecommendationOptions, optional
        Defaults to RecommendationOptions().

    Returns
    -------
    recs : list
        List of Recommendation.
    """
    if options is None:
        options = RecommendationOptions()
    matrix = engine.matrix
    neighbours = engine.get_nearest_neighbours(row_id,options.neighbours_to_use)
    ratings = find_row(matrix,engine.row_index,row_id)
    column_ids = matrix.row(0)
    recs = []
    included = set()
    for other_id,similarity in neighbours:
        other = find_row(matrix,engine.row_index,other_id)
        for j in range(1,len(ratings)):
            if options.unique and j in included:
                continue
            if other[j] == 1 and ratings[j] == 0 and column_ids[j] not in options.excluded_items:
                recs.append(Recommendation(column_ids[j],other_id,similarity))
                if len(recs) >= options.desired_count:
                    return recs
                included.add(j)
    return recs
