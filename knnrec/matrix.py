"""
Dense ternary rating matrix with identifier headers, and a
convenience method to load one from file.

The matrix is stored as a list of rows.  Row 0 is the header: its
first cell is an unused corner marker and the remaining cells are the
column identifiers.  Every other row starts with its row identifier
followed by one rating per column, where -1 means dislike, 0 means no
opinion and 1 means like:

>>> m = RatingMatrix([['emptycorner','item 1','item 2'],
...                   ['user 1',1,-1],
...                   ['user 2',0,1]])
>>> m.shape
(3, 3)
"""

import logging
import numbers
import numpy as np

from .errors import ShapeError, InvalidCellValueError, InvalidRowIdentifierError, \
    InvalidColumnIdentifierError, DuplicateRowIdentifierError, DuplicateColumnIdentifierError

CORNER = 'emptycorner'
RATINGS = (-1,0,1)

def is_valid_rating(value):
    """
    Check whether value is one of the permitted ratings -1, 0 or 1.
    Booleans are rejected even though they compare equal to 0 and 1.
    """
    if isinstance(value,(bool,np.bool_)) or not isinstance(value,numbers.Number):
        return False
    return value in RATINGS

def check_rating(row,column,value):
    if not is_valid_rating(value):
        raise InvalidCellValueError(row,column,value)

class RatingMatrix(object):
    """
    Rectangular store of ternary ratings addressed by index.

    Only the shape and the column header are checked here: cell values
    and row identifiers of the initial matrix are validated when
    similarities are computed.  Rows added later with append_row() are
    checked in full before they are stored.

    Parameters
    ----------
    matrix : list of lists, optional
        The header row followed by the data rows.  If None an empty
        matrix holding only the corner marker is created, to be
        filled with append_column() and append_row().
    """

    def __init__(self,matrix=None):
        if matrix is None:
            logging.warning('initializing an empty rating matrix')
            self.rows = [[CORNER]]
        else:
            self.rows = self._check_shape(matrix)
        self.revision = 0

    def _check_shape(self,matrix):
        if isinstance(matrix,(str,bytes)) or not hasattr(matrix,'__len__') or len(matrix) == 0:
            raise ShapeError('matrix must be a non empty sequence of rows in the format '
                             "[['emptycorner','item 1','item 2'],['user 1',1,-1],['user 2',0,1]]")
        header = matrix[0]
        if isinstance(header,(str,bytes)) or not hasattr(header,'__len__') or len(header) < 2:
            raise ShapeError('header row must hold the corner marker and at least one column identifier')
        rows = [list(row) if not isinstance(row,(str,bytes)) and hasattr(row,'__len__') else row for row in matrix]
        width = len(rows[0])
        for i,row in enumerate(rows):
            if not isinstance(row,list) or len(row) != width:
                raise ShapeError('row {0} does not have {1} cells like the header'.format(i,width))
        seen = set()
        for j in range(1,width):
            column_id = rows[0][j]
            if not isinstance(column_id,str):
                raise InvalidColumnIdentifierError(j,column_id)
            if column_id in seen:
                raise DuplicateColumnIdentifierError(column_id)
            seen.add(column_id)
        return rows

    @property
    def shape(self):
        """
        Return the shape of the matrix including the header row and column.
        """
        return len(self.rows),len(self.rows[0])

    @property
    def num_rows(self):
        """Number of data rows."""
        return len(self.rows)-1

    @property
    def num_columns(self):
        """Number of rating columns."""
        return len(self.rows[0])-1

    @property
    def column_ids(self):
        return self.rows[0][1:]

    @property
    def row_ids(self):
        return [row[0] for row in self.rows[1:]]

    def column_id(self,j):
        return self.rows[0][j]

    def row(self,i):
        return self.rows[i]

    def find_row(self,row_id):
        """
        Find the index of a row by linear scan, without relying
        on any identifier index.

        Returns
        -------
        i : int or None
            Index of the first row with this identifier, or None.
        """
        for i in range(1,len(self.rows)):
            if self.rows[i][0] == row_id:
                return i
        return None

    def find_column(self,column_id):
        header = self.rows[0]
        for j in range(1,len(header)):
            if header[j] == column_id:
                return j
        return None

    def append_row(self,row):
        """
        Append a data row after checking it.

        Parameters
        ----------
        row : list
            The row identifier followed by one rating per column,
            e.g. ['user x',1,0,-1].

        Returns
        -------
        i : int
            Index of the new row.
        """
        num_rows,width = self.shape
        if isinstance(row,(str,bytes)) or not hasattr(row,'__len__') or len(row) != width:
            raise ShapeError('row to add must have {0} cells like the other rows'.format(width))
        row = list(row)
        if not isinstance(row[0],str):
            raise InvalidRowIdentifierError(num_rows,row[0])
        if self.find_row(row[0]) is not None:
            raise DuplicateRowIdentifierError(row[0])
        for j in range(1,width):
            check_rating(num_rows,j,row[j])
        self.rows.append(row)
        self.revision += 1
        return num_rows

    def append_empty_row(self,row_id):
        """
        Append a row holding no ratings.
        """
        return self.append_row([row_id]+[0]*self.num_columns)

    def append_column(self,column_id):
        """
        Append a column, rating it 0 for every existing row.

        Returns
        -------
        j : int
            Index of the new column.
        """
        j = len(self.rows[0])
        if not isinstance(column_id,str):
            raise InvalidColumnIdentifierError(j,column_id)
        if self.find_column(column_id) is not None:
            raise DuplicateColumnIdentifierError(column_id)
        self.rows[0].append(column_id)
        for row in self.rows[1:]:
            row.append(0)
        self.revision += 1
        return j

    def set_value(self,i,j,value):
        if i < 1 or i >= len(self.rows) or j < 1 or j >= len(self.rows[0]):
            raise IndexError('cell [{0}][{1}] is outside the rating area'.format(i,j))
        check_rating(i,j,value)
        self.rows[i][j] = value
        self.revision += 1

    def __len__(self):
        return len(self.rows)

    def __repr__(self):
        return 'RatingMatrix({0} rows x {1} columns)'.format(self.num_rows,self.num_columns)

def loadtxt(filepath,delimiter=',',comments='#'):
    """
    Load a RatingMatrix from delimited text such as CSV, the first
    line holding the corner marker and the column identifiers and
    every following line a row identifier and its ratings.

    Parameters
    ----------
    filepath : file or str
        File containing the delimited matrix.
    delimiter : str, optional
        The string used to separate values (default: ',').
    comments : str, optional
        The character used to indicate the start of a comment (default: #).

    Returns
    -------
    mat : knnrec.matrix.RatingMatrix
        The rating matrix.
    """
    d = np.genfromtxt(filepath,delimiter=delimiter,comments=comments,dtype=str,
                      encoding='utf-8',autostrip=True)
    d = np.atleast_2d(d)
    if d.shape[1] < 2:
        raise ShapeError('invalid number of columns in input')
    rows = [list(d[0])]
    for i in range(1,d.shape[0]):
        row = [str(d[i,0])]
        for j in range(1,d.shape[1]):
            try:
                row.append(int(d[i,j]))
            except ValueError:
                raise InvalidCellValueError(i,j,d[i,j])
        rows.append(row)
    rows[0] = [str(v) for v in rows[0]]
    return RatingMatrix(rows)
