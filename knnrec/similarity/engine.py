"""
Compute and cache the Jaccard neighbours of each row of a rating matrix.
"""

import enum
import logging
from collections import namedtuple
from operator import itemgetter

import numpy as np

from ..errors import InvalidRowIdentifierError, DuplicateRowIdentifierError, \
    DuplicateColumnIdentifierError, RowIdNotFoundError, UnknownRowError, NotInitializedError
from ..index import IdentifierIndex
from ..matrix import check_rating
from .jaccard import TernaryRatings

NeighbourEntry = namedtuple('NeighbourEntry',['other_id','similarity'])

class ComputationState(enum.Enum):
    UNCOMPUTED = 'uncomputed'
    COMPUTING = 'computing'
    READY = 'ready'
    FAILED = 'failed'

def sort_neighbours(neighbours):
    """
    Sort neighbours by similarity, best first.  The sort is stable so
    rows with equal similarity keep their matrix order.
    """
    return sorted(neighbours,key=itemgetter(1),reverse=True)

class SimilarityEngine(object):
    """
    Owns the identifier indices and the neighbour lists computed from
    a rating matrix.

    Neighbour lists are only ever replaced whole: computing a row builds
    its complete list before it is stored.

    Parameters
    ==========
    matrix : knnrec.matrix.RatingMatrix
        The matrix to read ratings from.  It must not be mutated while
        a computation is in progress.
    """

    def __init__(self,matrix):
        self.matrix = matrix
        self.row_index = IdentifierIndex(DuplicateRowIdentifierError)
        self.column_index = IdentifierIndex(DuplicateColumnIdentifierError)
        self.similarities = {}
        self.state = ComputationState.UNCOMPUTED
        self.row_states = {}
        self.computed_revision = None
        self._columns_registered = False
        self._ratings = None

    def reset(self):
        """
        Forget every neighbour list and both indices, ready
        for a full recompute.
        """
        self.row_index.clear()
        self.column_index.clear()
        self.similarities.clear()
        self.row_states.clear()
        self.state = ComputationState.UNCOMPUTED
        self.computed_revision = self.matrix.revision
        self._columns_registered = False
        self._ratings = None

    def _scan(self):
        """
        Validate every row identifier and rating, returning
        the ratings as a TernaryRatings instance.
        """
        if self._ratings is not None and self._ratings[0] == self.matrix.revision:
            return self._ratings[1]
        num_rows,num_columns = self.matrix.shape
        ratings = np.zeros((num_rows-1,num_columns-1),dtype=np.int8)
        for i in range(1,num_rows):
            row = self.matrix.row(i)
            if not isinstance(row[0],str):
                raise InvalidRowIdentifierError(i,row[0])
            for j in range(1,num_columns):
                check_rating(i,j,row[j])
            ratings[i-1] = row[1:]
        ratings = TernaryRatings(ratings)
        self._ratings = (self.matrix.revision,ratings)
        return ratings

    def compute_row_range(self,start,end):
        """
        Compute the neighbour lists of rows start to end-1, comparing each
        with every other data row, and register their identifiers.

        Parameters
        ==========
        start : int
            Index of the first row, at least 1 since row 0 is the header.
        end : int
            Index one beyond the last row.

        Raises
        ======
        InvalidCellValueError, InvalidRowIdentifierError
            If any row of the matrix is malformed.
        DuplicateRowIdentifierError
            If a row in the range has the identifier of a row
            that is already registered.
        """
        num_rows = self.matrix.shape[0]
        if start < 1 or end > num_rows or start > end:
            raise IndexError('invalid row range [{0},{1}) for {2} rows'.format(start,end,num_rows))
        ratings = self._scan()
        if not self._columns_registered:
            for j in range(1,self.matrix.shape[1]):
                self.column_index.register(self.matrix.column_id(j),j)
            self._columns_registered = True
        # rows of a full run only become READY when the whole run succeeds
        if self.state is ComputationState.COMPUTING:
            done = ComputationState.COMPUTING
        else:
            done = ComputationState.READY
        row_ids = self.matrix.row_ids
        for i in range(start,end):
            sims = ratings.similarities(i-1)
            neighbours = [NeighbourEntry(row_ids[k],float(sims[k])) for k in range(len(row_ids)) if k != i-1]
            row_id = row_ids[i-1]
            self.row_index.register(row_id,i)
            self.similarities[row_id] = sort_neighbours(neighbours)
            self.row_states[row_id] = done
        logging.debug('computed neighbours for rows %d to %d',start,end-1)

    def finish_run(self,success):
        """
        Mark the end of a full run: the matrix and every row computed
        by it become READY on success and FAILED otherwise.  Neighbour
        lists of a failed run are kept but cannot be queried.
        """
        state = ComputationState.READY if success else ComputationState.FAILED
        self.state = state
        for row_id in self.row_states:
            self.row_states[row_id] = state

    def compute_single_row(self,row_id):
        """
        (Re)compute the neighbour list of one row, which is much
        cheaper than recomputing the whole matrix.

        The row is located by scanning the matrix since the row index
        may be stale or may not contain it yet.  Other rows keep
        whatever neighbour lists they already had.

        Every row identifier and rating in the matrix is validated, not
        only those of this row, before either index is touched: if that
        fails both indices are left as they were.

        Raises
        ======
        RowIdNotFoundError
            If no row has this identifier.
        InvalidCellValueError, InvalidRowIdentifierError
            If any row of the matrix is malformed.
        """
        i = self.matrix.find_row(row_id)
        if i is None:
            raise RowIdNotFoundError(row_id)
        self._ratings = None
        try:
            self._scan()
            self.row_index.unregister(row_id)
            self.column_index.clear()
            self._columns_registered = False
            self.computed_revision = self.matrix.revision
            self.row_states[row_id] = ComputationState.COMPUTING
            self.compute_row_range(i,i+1)
        except Exception:
            self.row_states[row_id] = ComputationState.FAILED
            raise

    def row_state(self,row_id):
        return self.row_states.get(row_id,ComputationState.UNCOMPUTED)

    @property
    def is_ready(self):
        if self.state is ComputationState.READY:
            return True
        return any(s is ComputationState.READY for s in self.row_states.values())

    @property
    def is_stale(self):
        """
        True if the matrix has been mutated since similarities
        were last computed.
        """
        return self.computed_revision is not None and self.computed_revision != self.matrix.revision

    def check_ready(self):
        if not self.is_ready:
            raise NotInitializedError()

    def get_nearest_neighbours(self,row_id,k=None):
        """
        Get the most similar rows to a supplied row.

        Parameters
        ==========
        row_id : str
            Identifier of the row.
        k : int, optional
            Maximum number of neighbours to return, all of them if None.

        Returns
        =======
        neighbours : list
            Sorted list of NeighbourEntry, best first.
        """
        self.check_ready()
        neighbours = self.similarities.get(row_id)
        if neighbours is None:
            raise UnknownRowError(row_id)
        if k is None:
            return list(neighbours)
        if k < 0:
            raise ValueError('number of neighbours must be non-negative, got {0}'.format(k))
        return neighbours[:k]
