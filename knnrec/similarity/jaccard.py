"""
Jaccard similarity between ternary rating vectors.

Two rows agree on a column when both hold the same non-zero rating.
The similarity is the number of agreeing columns divided by the number
of columns on which either row expressed an opinion, or 0 if neither
row rated anything:

>>> jaccard_similarity([1,-1,0,0,-1,1,0],[1,-1,0,1,-1,0,0])
0.6
"""

import numpy as np
from scipy.sparse import csr_matrix

def jaccard_similarity(a,b):
    """
    Compute the Jaccard similarity between two rating vectors.

    Parameters
    ----------
    a, b : array_like
        Rating vectors of equal length holding -1, 0 or 1.

    Returns
    -------
    sim : float
        Similarity in [0,1].
    """
    a = np.asarray(a)
    b = np.asarray(b)
    if a.shape != b.shape:
        raise ValueError('rating vectors must have the same length')
    agree = np.count_nonzero((a == b) & (a != 0))
    considered = np.count_nonzero((a != 0) | (b != 0))
    if considered == 0:
        return 0.0
    return float(agree)/considered

class TernaryRatings(object):
    """
    Sparse views of a ternary rating matrix, kept so that one row can be
    compared with every row without rescanning the data.

    Parameters
    ==========
    ratings : array_like, shape = [num_rows, num_columns]
        Matrix of -1, 0 and 1 ratings.
    """

    def __init__(self,ratings):
        X = csr_matrix(np.asarray(ratings,dtype=np.int8))
        self.likes = (X > 0).astype(np.int32)
        self.dislikes = (X < 0).astype(np.int32)
        self.rated = self.likes + self.dislikes
        self.num_rated = np.asarray(self.rated.sum(axis=1)).ravel()

    @property
    def shape(self):
        return self.rated.shape

    def similarities(self,i):
        """
        Compute similarity scores between row i and every row.

        Parameters
        ==========
        i : int
            Index of the row to compare.

        Returns
        =======
        similarities : numpy.ndarray
            Vector of similarity scores, including the self-similarity of
            row i which callers will usually want to skip.
        """
        agree = self.likes.dot(self.likes[i].T) + self.dislikes.dot(self.dislikes[i].T)
        agree = agree.toarray().ravel()
        both = self.rated.dot(self.rated[i].T).toarray().ravel()
        considered = self.num_rated[i] + self.num_rated - both
        sims = np.zeros(len(considered),dtype=np.float64)
        np.divide(agree,considered,out=sims,where=considered > 0)
        return sims

def jaccard_similarities(A,a):
    """
    Compute similarity scores between rating vector a
    and all the rows of A.
    """
    A = np.atleast_2d(np.asarray(A))
    ratings = TernaryRatings(np.vstack([A,np.asarray(a)[np.newaxis,:]]))
    return ratings.similarities(A.shape[0])[:-1]
