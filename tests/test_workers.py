from core.services.workers import ImmediateWorker


def test_immediate_worker_delivers_result():
    results = []
    ImmediateWorker().submit(lambda: 42, lambda r, e: results.append((r, e)))
    assert results == [(42, None)]


def test_immediate_worker_delivers_error():
    results = []

    def boom():
        raise OSError("disk")

    ImmediateWorker().submit(boom, lambda r, e: results.append((r, e)))
    assert results[0][0] is None
    assert isinstance(results[0][1], OSError)
