from .matrix import RatingMatrix, loadtxt
from .index import IdentifierIndex
from .similarity.engine import SimilarityEngine, NeighbourEntry, ComputationState
from .scheduler import ChunkedRunner
from .generation import Recommendation, RecommendationOptions
from .base_recommender import BaseRecommender
from .knn_recommender import KNNRecommender

__version__ = '0.1.0'

def load_recommender(filepath,delimiter=',',chunk_size=3):
    """
    Create a KNNRecommender from a delimited text file, without
    computing any similarities yet.

    Parameters
    ----------
    filepath : str
        The file to load, see knnrec.matrix.loadtxt() for the format.
    delimiter : str
        The string used to separate values (default: ',').
    chunk_size : int
        Number of rows computed in each batch (default: 3).
    """
    return KNNRecommender(loadtxt(filepath,delimiter=delimiter),chunk_size=chunk_size)
