import asyncio

import pytest

from knnrec import KNNRecommender, RecommendationOptions, Recommendation, NeighbourEntry, ComputationState
from knnrec.errors import RowIdNotFoundError, ColumnIdNotFoundError, NotInitializedError, \
    DuplicateRowIdentifierError, InvalidCellValueError, ShapeError
from knnrec.matrix import RatingMatrix
from knnrec.similarity.jaccard import jaccard_similarity
from knnrec.testing import get_random_rating_matrix, assert_neighbours_equal

def simple_matrix():
    return [['emptycorner','item 1','item 2','item 3','item 4','item 5','item 6','item 7'],
            ['user 1',1,-1,0,0,-1,1,0],
            ['user 2',1,-1,0,1,-1,0,0]]

def three_user_matrix():
    return simple_matrix()+[['user 3',1,0,0,1,0,1,0]]

def test_first_similar_user():
    r = KNNRecommender(simple_matrix())
    assert asyncio.run(r.initialize()) is True
    neighbours = r.get_nearest_neighbours('user 1',1)
    assert neighbours[0].other_id == 'user 2'
    assert neighbours[0].similarity == 3/5

def test_three_users():
    r = KNNRecommender(three_user_matrix())
    r.fit()
    assert r.get_nearest_neighbours('user 1',2) == [NeighbourEntry('user 2',3/5),NeighbourEntry('user 3',2/5)]
    assert r.get_nearest_neighbours('user 2') == [NeighbourEntry('user 1',3/5),NeighbourEntry('user 3',2/5)]
    assert r.get_nearest_neighbours('user 3') == [NeighbourEntry('user 1',2/5),NeighbourEntry('user 2',2/5)]

def test_state():
    r = KNNRecommender(three_user_matrix())
    assert r.state is ComputationState.UNCOMPUTED
    with pytest.raises(NotInitializedError):
        r.get_nearest_neighbours('user 1')
    with pytest.raises(NotInitializedError):
        r.recommend_items('user 1')
    r.fit()
    assert r.state is ComputationState.READY
    assert r.row_state('user 2') is ComputationState.READY

def test_initialize_for_row():
    r = KNNRecommender(three_user_matrix())
    r.initialize_for_row('user 3')
    assert r.state is ComputationState.UNCOMPUTED
    assert r.row_state('user 3') is ComputationState.READY
    assert r.get_nearest_neighbours('user 3') == [NeighbourEntry('user 1',2/5),NeighbourEntry('user 2',2/5)]
    with pytest.raises(RowIdNotFoundError):
        r.initialize_for_row('user 4')

def test_single_row_matches_full():
    matrix = get_random_rating_matrix(15,20,random_state=0)
    full = KNNRecommender(matrix)
    full.fit()
    for row_id in ['user 1','user 8','user 15']:
        r = KNNRecommender(matrix)
        r.initialize_for_row(row_id)
        assert_neighbours_equal(full.get_nearest_neighbours(row_id),r.get_nearest_neighbours(row_id))

def test_matches_pairwise_similarity():
    matrix = get_random_rating_matrix(20,30,random_state=1)
    r = KNNRecommender(matrix)
    asyncio.run(r.initialize())
    rows = dict((row[0],row[1:]) for row in matrix[1:])
    for row_id in rows:
        for other_id,similarity in r.get_nearest_neighbours(row_id):
            assert similarity == jaccard_similarity(rows[row_id],rows[other_id])

def test_recommend_items():
    matrix = simple_matrix()+[['user 3',0,-1,0,1,-1,0,0]]
    r = KNNRecommender(matrix)
    r.fit()
    options = RecommendationOptions(desired_count=3,neighbours_to_use=2,unique=True)
    assert r.recommend_items('user 3',options) == [Recommendation('item 1','user 2',3/4),
                                                   Recommendation('item 6','user 1',2/5)]

def test_batch_recommend_items():
    r = KNNRecommender(simple_matrix()+[['user 3',0,-1,0,1,-1,0,0]])
    r.fit()
    recs = r.batch_recommend_items(RecommendationOptions(desired_count=3,neighbours_to_use=2,unique=True))
    assert sorted(recs) == ['user 1','user 2','user 3']
    assert [x.item_id for x in recs['user 3']] == ['item 1','item 6']
    assert recs['user 2'] == [Recommendation('item 6','user 1',3/5)]

def test_build_from_empty():
    r = KNNRecommender()
    for j in range(1,8):
        r.add_column('item {0}'.format(j))
    for row in three_user_matrix()[1:]:
        r.add_row(row)
    assert r.matrix.shape == (4,8)
    r.fit()
    assert r.get_nearest_neighbours('user 1')[0] == NeighbourEntry('user 2',3/5)

def test_add_empty_row_and_like():
    r = KNNRecommender(three_user_matrix())
    r.fit()
    r.add_empty_row('user 4')
    assert r.get_row('user 4') == ['user 4',0,0,0,0,0,0,0]
    r.add_like('user 4','item 1')
    r.add_dislike('user 4','item 2')
    assert r.get_row('user 4')[:3] == ['user 4',1,-1]
    assert r.is_stale
    r.initialize_for_row('user 4')
    assert r.get_nearest_neighbours('user 4',1) == [NeighbourEntry('user 1',2/4)]
    with pytest.raises(DuplicateRowIdentifierError):
        r.add_empty_row('user 4')

def test_characteristics():
    r = KNNRecommender([['emptycorner','red','round'],['apple',0,1],['ball',0,1]])
    r.fit()
    r.add_characteristic('apple','red')
    r.add_column('sweet')
    r.add_characteristic('apple','sweet')
    assert r.get_row('apple') == ['apple',1,1,1]
    r.remove_characteristic('apple','red')
    assert r.get_row('apple') == ['apple',0,1,1]
    r.fit()
    assert r.get_nearest_neighbours('apple') == [NeighbourEntry('ball',1/2)]

def test_set_value_needs_known_ids():
    r = KNNRecommender(three_user_matrix())
    with pytest.raises(RowIdNotFoundError):
        r.add_like('user 1','item 1')
    r.fit()
    with pytest.raises(RowIdNotFoundError):
        r.add_like('user 9','item 1')
    with pytest.raises(ColumnIdNotFoundError):
        r.add_like('user 1','item 9')

def test_mutation_does_not_recompute():
    r = KNNRecommender(three_user_matrix())
    r.fit()
    assert not r.is_stale
    r.add_like('user 1','item 4')
    assert r.is_stale
    assert r.get_nearest_neighbours('user 1')[0] == NeighbourEntry('user 2',3/5)
    r.fit()
    assert not r.is_stale
    assert r.get_nearest_neighbours('user 1')[0] == NeighbourEntry('user 2',4/5)

def test_get_row():
    r = KNNRecommender(three_user_matrix())
    assert r.get_row('user 2') == ['user 2',1,-1,0,1,-1,0,0]
    r.get_row('user 2')[1] = 0
    assert r.get_row('user 2')[1] == 1
    with pytest.raises(RowIdNotFoundError):
        r.get_row('user 9')

def test_fit_new_matrix():
    r = KNNRecommender(simple_matrix())
    r.fit()
    r.fit(RatingMatrix(three_user_matrix()))
    assert len(r.get_nearest_neighbours('user 1')) == 2

def test_bad_matrix():
    with pytest.raises(ShapeError):
        KNNRecommender([['emptycorner']])

def test_str():
    assert str(KNNRecommender(simple_matrix(),chunk_size=5)) == 'KNNRecommender(chunk_size=5)'

def test_failed_initialize_rejects_queries():
    matrix = three_user_matrix()
    matrix[3][4] = 2
    r = KNNRecommender(matrix,chunk_size=1)
    with pytest.raises(InvalidCellValueError):
        asyncio.run(r.initialize())
    assert r.state is ComputationState.FAILED
    with pytest.raises(NotInitializedError):
        r.get_nearest_neighbours('user 1')
    with pytest.raises(NotInitializedError):
        r.recommend_items('user 1')

def test_failed_single_row_keeps_indices():
    r = KNNRecommender(three_user_matrix())
    r.fit()
    r.add_column('item 8')
    r.add_row(['user 9']+[0]*8)
    r.set_value('user 9','item 8',1)
    r.matrix.rows[2][3] = 5
    with pytest.raises(InvalidCellValueError):
        r.initialize_for_row('user 1')
    assert r.row_state('user 1') is ComputationState.FAILED
    assert r.engine.column_index.index_of('item 8') == 8
    assert r.engine.row_index.index_of('user 1') == 1
    r.set_value('user 9','item 8',0)
    assert r.get_row('user 9')[8] == 0
