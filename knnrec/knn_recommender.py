"""
k-nearest neighbour recommender over a ternary rating matrix,
using Jaccard similarity between rows.

The matrix can hold users rated against items, or items against
their characteristics: the rows are compared with each other
whatever they represent.

>>> import asyncio
>>> r = KNNRecommender([['emptycorner','item 1','item 2','item 3'],
...                     ['user 1',1,-1,1],
...                     ['user 2',1,-1,0]])
>>> asyncio.run(r.initialize())
True
>>> r.recommend_items('user 2')
[Recommendation(item_id='item 3', recommender_id='user 1', similarity=0.6666666666666666)]
"""

from .base_recommender import BaseRecommender
from .errors import RowIdNotFoundError, ColumnIdNotFoundError
from .generation import generate_recommendations, find_row
from .matrix import RatingMatrix
from .scheduler import ChunkedRunner, CHUNK_SIZE
from .similarity.engine import SimilarityEngine

class KNNRecommender(BaseRecommender):
    """
    Recommend items liked by the most similar rows.

    Computing similarities is an O(rows^2 * columns) operation, done
    either for the whole matrix with initialize() or fit(), or for a
    single row with initialize_for_row().  Changing the dataset does not
    recompute anything: call one of these again to pick up changes.

    Parameters
    ----------
    matrix : list of lists or knnrec.matrix.RatingMatrix, optional
        The rating matrix in the format
        [['emptycorner','item 1','item 2'],['user 1',1,-1],['user 2',0,1]]
        where -1 means dislike, 0 no rating and 1 like.  If None an empty
        matrix is created, to be filled with add_column() and add_row().
    chunk_size : int (default: 3)
        Number of rows computed between yields to the event loop
        by initialize().
    """

    def __init__(self,matrix=None,chunk_size=CHUNK_SIZE):
        self.chunk_size = chunk_size
        self._set_matrix(matrix)
        self.description = 'KNNRecommender(chunk_size={0})'.format(chunk_size)

    def _set_matrix(self,matrix):
        if not isinstance(matrix,RatingMatrix):
            matrix = RatingMatrix(matrix)
        self.matrix = matrix
        self.engine = SimilarityEngine(matrix)
        self.runner = ChunkedRunner(self.engine,self.chunk_size)

    async def initialize(self):
        """
        Compute the neighbours of every row, yielding to the event
        loop between batches of rows.

        Returns
        -------
        success : bool
            True when every row has been computed.
        """
        return await self.runner.run_full()

    def fit(self,train=None):
        """
        Compute the neighbours of every row without yielding.

        Parameters
        ----------
        train : list of lists or knnrec.matrix.RatingMatrix, optional
            Replace the current matrix with this one before computing.
        """
        if train is not None:
            self._set_matrix(train)
        self.runner.run()

    def initialize_for_row(self,row_id):
        """
        (Re)compute the neighbours of a single row.  This is much
        faster than recomputing every row so use it when you can.

        Every row identifier and rating in the matrix is still validated,
        not only those of row_id, so a malformed cell in any row makes
        this raise and leaves the row FAILED.
        """
        self.engine.compute_single_row(row_id)

    @property
    def state(self):
        return self.engine.state

    def row_state(self,row_id):
        return self.engine.row_state(row_id)

    @property
    def is_stale(self):
        return self.engine.is_stale

    def get_nearest_neighbours(self,row_id,k=None):
        """
        Returns a sorted list of the k rows most similar to row_id, best
        first, as NeighbourEntry(other_id,similarity) tuples.  All other
        rows are returned if k is None.
        """
        return self.engine.get_nearest_neighbours(row_id,k)

    def recommend_items(self,row_id,options=None):
        """
        Recommend items that the nearest neighbours of row_id have
        liked and row_id has not rated yet.

        Parameters
        ----------
        row_id : str
            Identifier of the row to recommend for.
        options : knnrec.generation.RecommendationOptions, optional
            Defaults to one recommendation drawn from the three nearest
            neighbours.

        Returns
        -------
        recs : list
            List of Recommendation(item_id,recommender_id,similarity),
            possibly shorter than requested or empty.
        """
        return generate_recommendations(self.engine,row_id,options)

    def recommendable_rows(self):
        return [row_id for row_id in self.matrix.row_ids if row_id in self.engine.similarities]

    def get_row(self,row_id):
        """
        Get all the ratings of a row, e.g. ['user 1',1,0,-1,0].
        """
        return list(find_row(self.matrix,self.engine.row_index,row_id))

    def add_row(self,row):
        """
        Add a row such as ['user x',1,0,-1] to the dataset.
        """
        i = self.matrix.append_row(row)
        self.engine.row_index.register(row[0],i)
        return i

    def add_empty_row(self,row_id):
        """
        Add a row with no ratings to the dataset.
        """
        i = self.matrix.append_empty_row(row_id)
        self.engine.row_index.register(row_id,i)
        return i

    def add_column(self,column_id):
        """
        Add a new item (or item characteristic) to the dataset, unrated
        by every existing row.
        """
        j = self.matrix.append_column(column_id)
        self.engine.column_index.register(column_id,j)
        return j

    def set_value(self,row_id,column_id,value):
        """
        Set the rating of row_id for column_id to -1, 0 or 1.

        Both identifiers must already be known: compute similarities, or
        add the row or column through this recommender, first.
        """
        i = self.engine.row_index.index_of(row_id)
        if i is None:
            raise RowIdNotFoundError(row_id)
        j = self.engine.column_index.index_of(column_id)
        if j is None:
            raise ColumnIdNotFoundError(column_id)
        self.matrix.set_value(i,j,value)

    def add_like(self,row_id,column_id):
        self.set_value(row_id,column_id,1)

    def add_dislike(self,row_id,column_id):
        self.set_value(row_id,column_id,-1)

    def add_characteristic(self,row_id,column_id):
        self.set_value(row_id,column_id,1)

    def remove_characteristic(self,row_id,column_id):
        self.set_value(row_id,column_id,0)
