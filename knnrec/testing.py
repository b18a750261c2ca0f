from sklearn.utils import check_random_state
from numpy.testing import assert_array_equal

from .matrix import CORNER

def get_random_rating_matrix(rows=10,cols=20,random_state=None):
    """
    Return a list of lists rating matrix with random -1, 0 and 1
    ratings, rows named 'user 1'... and columns 'item 1'...
    """
    rng = check_random_state(random_state)
    data = rng.randint(-1,2,size=(rows,cols))
    matrix = [[CORNER]+['item {0}'.format(j+1) for j in range(cols)]]
    for i in range(rows):
        matrix.append(['user {0}'.format(i+1)]+[int(v) for v in data[i]])
    return matrix

def assert_neighbours_equal(expected,actual):
    assert_array_equal([n.other_id for n in expected],[n.other_id for n in actual])
    assert_array_equal([n.similarity for n in expected],[n.similarity for n in actual])
