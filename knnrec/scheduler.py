"""
Run a full similarity computation in small batches of rows, giving
other tasks on the event loop a turn between batches.
"""

import asyncio
import logging

from .similarity.engine import ComputationState

CHUNK_SIZE = 3

class ChunkedRunner(object):
    """
    Drive SimilarityEngine.compute_row_range() over every data row in
    batches of chunk_size rows.

    There is no cancellation: a run continues until every batch is done
    or one of them fails.  Rows only become queryable once every batch
    has succeeded: neighbour lists written by earlier batches of a failed
    run are left in place but marked FAILED.

    Parameters
    ----------
    engine : knnrec.similarity.engine.SimilarityEngine
        The engine to run.
    chunk_size : int (default: 3)
        Number of rows computed in each batch.
    """

    def __init__(self,engine,chunk_size=CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError('chunk_size must be positive, got {0}'.format(chunk_size))
        self.engine = engine
        self.chunk_size = chunk_size

    def create_tasks(self,num_rows):
        """
        Split the data rows 1..num_rows-1 into (start,end) batches.
        """
        tasks = []
        for start in range(1,num_rows,self.chunk_size):
            end = min(num_rows,start+self.chunk_size)
            tasks.append((start,end))
        return tasks

    def iter_chunks(self):
        """
        Reset the engine then compute one batch per iteration, yielding
        the (start,end) range just completed.  Abandoning the iterator
        part way leaves the engine in the COMPUTING state.
        """
        engine = self.engine
        engine.reset()
        engine.state = ComputationState.COMPUTING
        num_rows = engine.matrix.shape[0]
        tasks = self.create_tasks(num_rows)
        logging.info('computing similarities for %d rows in %d batches of up to %d rows',
                     num_rows-1, len(tasks), self.chunk_size)
        try:
            for start,end in tasks:
                engine.compute_row_range(start,end)
                yield start,end
        except Exception:
            engine.finish_run(False)
            logging.error('FAILED: similarity computation aborted after %d/%d rows',
                          len(engine.similarities), num_rows-1)
            raise
        engine.finish_run(True)
        logging.info('done')

    def run(self):
        """
        Compute every batch without yielding, e.g. to make debugging
        easier or when no event loop is running.
        """
        for _ in self.iter_chunks():
            pass
        return True

    async def run_full(self):
        """
        Compute every batch, awaiting between batches so that a large
        matrix does not block the event loop.

        Returns
        -------
        success : bool
            True once every row has its neighbour list.

        Raises
        ------
        Any validation error raised by a batch, after which the remaining
        batches are skipped.
        """
        for _ in self.iter_chunks():
            await asyncio.sleep(0)
        return True
