import threading

import pytest

from cocuyo.batch import RegionParams, sample_regions
from cocuyo.sampling import Average, CpuFrame, Max, Min, Palette
from cocuyo.worker import SamplingResult, SamplingWorker, SendResult, SendStatus

TIMEOUT = 5.0


def make_2x2() -> CpuFrame:
    data = bytes(
        [
            0, 0, 255, 255,
            0, 255, 0, 255,
            255, 0, 0, 255,
            255, 255, 255, 255,
        ]
    )
    return CpuFrame(data, 2, 2)


def full_regions():
    return [
        RegionParams(0, 0.0, 0.0, 2.0, 2.0, Average()),
        RegionParams(1, 0.0, 0.0, 2.0, 2.0, Max()),
        RegionParams(2, 0.0, 0.0, 2.0, 2.0, Min()),
        RegionParams(3, 0.0, 0.0, 1.0, 1.0, Palette()),
    ]


def test_sent_request_resolves_to_sampled_colors():
    frame = make_2x2()
    with SamplingWorker() as worker:
        outcome = worker.try_send(frame, full_regions())
        assert outcome.status is SendStatus.SENT
        assert outcome.sent
        result = outcome.future.result(TIMEOUT)
    assert result.colors == [
        (0, (127, 127, 127)),
        (1, (255, 255, 255)),
        (2, (0, 0, 255)),
        (3, (255, 0, 0)),
    ]


def test_result_matches_direct_batch_sampling():
    frame = make_2x2()
    regions = full_regions() + [RegionParams(9, 5.0, 5.0, 1.0, 1.0, Average())]
    with SamplingWorker() as worker:
        result = worker.try_send(frame, regions).future.result(TIMEOUT)
    assert result.colors == sample_regions(frame, regions)
    assert result.sampling_time_ms >= 0.0


def test_failing_sampler_yields_none_for_every_region():
    def broken(frame, regions):
        raise RuntimeError("import failed")

    regions = full_regions()
    with SamplingWorker(sampler=broken) as worker:
        result = worker.try_send(make_2x2(), regions).future.result(TIMEOUT)
        assert result.colors == [(r.region_id, None) for r in regions]
        # The worker keeps running after a failure.
        assert worker.try_send(make_2x2(), regions).status is SendStatus.SENT


def test_busy_while_one_request_processing_and_one_queued():
    started = threading.Event()
    release = threading.Event()

    def slow(frame, regions):
        started.set()
        assert release.wait(TIMEOUT)
        return sample_regions(frame, regions)

    frame = make_2x2()
    regions = full_regions()
    worker = SamplingWorker(sampler=slow)
    try:
        first = worker.try_send(frame, regions)
        assert first.status is SendStatus.SENT
        assert started.wait(TIMEOUT)
        second = worker.try_send(frame, regions)
        assert second.status is SendStatus.SENT
        third = worker.try_send(frame, regions)
        assert third.status is SendStatus.BUSY
        assert third.future is None
        release.set()
        assert first.future.result(TIMEOUT).colors == sample_regions(frame, regions)
        assert second.future.result(TIMEOUT).colors == sample_regions(frame, regions)
    finally:
        release.set()
        worker.close()


def test_dead_after_close():
    worker = SamplingWorker()
    worker.close()
    outcome = worker.try_send(make_2x2(), full_regions())
    assert outcome.status is SendStatus.DEAD
    assert not outcome.sent


def test_close_is_idempotent():
    worker = SamplingWorker()
    worker.close()
    worker.close()
    assert worker.try_send(make_2x2(), []).status is SendStatus.DEAD


def test_context_manager_closes_worker():
    with SamplingWorker() as worker:
        pass
    assert worker.try_send(make_2x2(), []).status is SendStatus.DEAD


def test_accepted_request_completes_before_close_returns():
    release = threading.Event()

    def gated(frame, regions):
        assert release.wait(TIMEOUT)
        return sample_regions(frame, regions)

    worker = SamplingWorker(sampler=gated)
    outcome = worker.try_send(make_2x2(), full_regions())
    release.set()
    worker.close()
    assert outcome.future.done()
    assert outcome.future.result(0).colors[0] == (0, (127, 127, 127))


def test_empty_request_gives_empty_colors():
    with SamplingWorker() as worker:
        result = worker.try_send(make_2x2(), []).future.result(TIMEOUT)
    assert result.colors == []


def test_sampling_result_default():
    result = SamplingResult()
    assert result.colors == []
    assert result.sampling_time_ms == 0.0


def test_send_result_sent_property():
    assert SendResult(SendStatus.BUSY).sent is False
    assert SendResult(SendStatus.DEAD).future is None


@pytest.mark.parametrize("status", [SendStatus.BUSY, SendStatus.DEAD])
def test_non_sent_statuses_are_not_sent(status):
    assert not SendResult(status).sent