import pytest

from cafesim.entities import Customer
from cafesim.errors import SimulationInvariantError
from cafesim.metrics import Metrics, Statistics


def test_empty_run_reports_no_data():
    stats = Metrics().snapshot(end_time=0.0)
    assert stats.total_customers == 0
    assert stats.average_wait_time is None
    assert stats.mean_completed_wait is None
    assert stats.time_average_queue_length() is None
    assert stats.max_queue_length == 0
    assert stats.as_dict()["average_wait_time"] is None


def test_wait_includes_queueing_and_service():
    m = Metrics()
    m.note_arrival(1.0, 1)
    m.note_arrival(2.0, 2)
    m.note_completion(4.0, Customer(1, 1.0), 1)
    m.note_completion(7.5, Customer(2, 2.0), 0)

    stats = m.snapshot(end_time=10.0)
    assert stats.total_wait_time == pytest.approx(3.0 + 5.5)
    assert stats.average_wait_time == pytest.approx(4.25)
    assert stats.customers_completed == 2
    assert stats.queue_lengths == ((1.0, 1), (2.0, 2), (4.0, 1), (7.5, 0))


def test_average_wait_divides_by_arrivals():
    m = Metrics()
    m.note_arrival(0.0, 1)
    m.note_arrival(1.0, 2)
    m.note_completion(2.0, Customer(1, 0.0), 1)

    stats = m.snapshot(end_time=5.0)
    assert stats.average_wait_time == pytest.approx(1.0)
    assert stats.mean_completed_wait == pytest.approx(2.0)


def test_time_average_queue_length_is_step_integral():
    stats = Statistics(
        total_customers=2,
        total_wait_time=0.0,
        customers_completed=0,
        queue_lengths=((2.0, 1), (4.0, 2), (6.0, 0)),
        end_time=10.0,
    )
    # 0*2 + 1*2 + 2*2 + 0*4 = 6 over 10 minutes
    assert stats.time_average_queue_length() == pytest.approx(0.6)
    assert stats.max_queue_length == 2


def test_snapshot_is_frozen_and_detached():
    m = Metrics()
    m.note_arrival(0.5, 1)
    stats = m.snapshot(end_time=1.0)
    m.note_arrival(0.7, 2)

    assert len(stats.queue_lengths) == 1
    with pytest.raises(AttributeError):
        stats.total_customers = 10


def test_negative_queue_length_is_invariant_error():
    with pytest.raises(SimulationInvariantError):
        Metrics().note_arrival(1.0, -1)
