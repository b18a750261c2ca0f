"""
Bidirectional mapping between row or column identifiers
and their position in a rating matrix.
"""

from .errors import DuplicateIdError

class IdentifierIndex(object):
    """
    Map string identifiers to matrix indices and back.

    Lookups return None for an unknown identifier: index 0 is a
    legitimate position and must never be read as "not found".

    Parameters
    ----------
    duplicate_error : type, optional
        Exception class raised by register() for an identifier
        that is already present (default: DuplicateIdError).
    """

    def __init__(self,duplicate_error=DuplicateIdError):
        self.duplicate_error = duplicate_error
        self._index = {}
        self._ids = {}

    def index_of(self,key):
        """
        Return the index registered for key, or None if it is unknown.
        """
        return self._index.get(key)

    def id_at(self,index):
        return self._ids.get(index)

    def register(self,key,index):
        """
        Register key at the given index.

        Raises
        ------
        DuplicateIdError
            If key is already registered.
        """
        if key in self._index:
            raise self.duplicate_error(key)
        self._index[key] = index
        self._ids[index] = key

    def unregister(self,key):
        index = self._index.pop(key,None)
        if index is not None and self._ids.get(index) == key:
            del self._ids[index]
        return index

    def clear(self):
        self._index.clear()
        self._ids.clear()

    def ids(self):
        return list(self._index)

    def __contains__(self,key):
        return key in self._index

    def __len__(self):
        return len(self._index)
