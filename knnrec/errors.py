"""
Exceptions raised by knnrec.

Every error reflects a violation of the data contract by the caller,
nothing here is retried or downgraded to a default value.
"""

class KNNRecommenderError(Exception):
    """Base class for all knnrec errors."""

class ShapeError(KNNRecommenderError,ValueError):
    """The matrix is not rectangular or is too small to use."""

class InvalidCellValueError(KNNRecommenderError,ValueError):
    """
    A rating cell holds something other than -1, 0 or 1.

    Parameters
    ----------
    row : int
        Row index of the offending cell.
    column : int
        Column index of the offending cell.
    value : object
        The invalid value.
    """

    def __init__(self,row,column,value):
        self.row = row
        self.column = column
        self.value = value
        super(InvalidCellValueError,self).__init__(
            'invalid value at [{0}][{1}]: {2!r}, must be -1, 0 or 1'.format(row,column,value))

class InvalidRowIdentifierError(KNNRecommenderError,TypeError):

    def __init__(self,row,value):
        self.row = row
        self.value = value
        super(InvalidRowIdentifierError,self).__init__(
            'row identifier at [{0}][0] is not a string: {1!r}'.format(row,value))

class InvalidColumnIdentifierError(KNNRecommenderError,TypeError):

    def __init__(self,column,value):
        self.column = column
        self.value = value
        super(InvalidColumnIdentifierError,self).__init__(
            'column identifier at [0][{0}] is not a string: {1!r}'.format(column,value))

class DuplicateIdError(KNNRecommenderError,ValueError):
    """An identifier is registered twice in the same index."""

    def __init__(self,key):
        self.key = key
        super(DuplicateIdError,self).__init__('duplicate identifier: {0!r}'.format(key))

class DuplicateRowIdentifierError(DuplicateIdError):
    pass

class DuplicateColumnIdentifierError(DuplicateIdError):
    pass

class RowIdNotFoundError(KNNRecommenderError,LookupError):

    def __init__(self,row_id):
        self.row_id = row_id
        super(RowIdNotFoundError,self).__init__('row {0!r} not found in the matrix'.format(row_id))

class ColumnIdNotFoundError(KNNRecommenderError,LookupError):

    def __init__(self,column_id):
        self.column_id = column_id
        super(ColumnIdNotFoundError,self).__init__('column {0!r} not found in the matrix'.format(column_id))

class UnknownRowError(KNNRecommenderError,LookupError):
    """No neighbour list has been computed for the row."""

    def __init__(self,row_id):
        self.row_id = row_id
        super(UnknownRowError,self).__init__('similarities not computed for row {0!r}'.format(row_id))

class NotInitializedError(KNNRecommenderError,RuntimeError):

    def __init__(self,message='recommender not initialized, you must compute similarities first'):
        super(NotInitializedError,self).__init__(message)
