class BaseRecommender(object):
    """
    Minimal interface to be implemented by recommenders, along with
    some helper methods. A concrete recommender must implement the
    recommend_items() method and should provide its own implementation
    of __str__() so that it can be identified when printing results.

    Recommenders here address rows and items by their string identifiers
    rather than by index, since the matrix can grow after construction.
    """

    def recommend_items(self,row_id,options=None):
        """
        Recommend new items for a row.

        Parameters
        ==========
        row_id : str
            Identifier of the row (usually a user) to recommend for.
        options : knnrec.generation.RecommendationOptions, optional
            How many recommendations to make and where to draw them from.

        Returns
        =======
        recs : list
            List of knnrec.generation.Recommendation.
        """
        raise NotImplementedError('you must implement recommend_items()')

    def fit(self,train=None):
        """
        Train on supplied data. In general you will want to
        implement this rather than computing recommendations on
        the fly.

        Parameters
        ==========
        train : list of lists or knnrec.matrix.RatingMatrix, optional
            Rating matrix to train on.
        """
        raise NotImplementedError('you should implement fit()')

    def recommendable_rows(self):
        """
        Return the identifiers of the rows that recommend_items() accepts.
        """
        raise NotImplementedError('you must implement recommendable_rows()')

    def __str__(self):
        if hasattr(self,'description'):
            return self.description
        return 'unspecified recommender: you should set self.description or implement __str__()'

    def batch_recommend_items(self,options=None):
        """
        Recommend new items for every row that can be recommended for.

        Parameters
        ==========
        options : knnrec.generation.RecommendationOptions, optional
            Passed to recommend_items() for each row.

        Returns
        =======
        recs : dict
            Maps each row identifier to its list of recommendations.

        Notes
        =====
        This provides a default implementation, you will be able to optimize
        this for most recommenders.
        """
        recs = {}
        for row_id in self.recommendable_rows():
            recs[row_id] = self.recommend_items(row_id,options)
        return recs
