import pytest

from netmetrics import (
    ApplicationUsage,
    CongestionLevel,
    DetailedStability,
    PacketRecord,
    clean_packets,
    compute_metrics,
    parse_raw_packets,
)
from netmetrics.pipeline.aggregator import classify_congestion, classify_stability
from netmetrics.pipeline.stats import mean, pstdev, round_half_up


def _rec(**kw):
    base = dict(time=100.0, protocol="TCP", frame_length=100)
    base.update(kw)
    return PacketRecord(**base)


# --- helpers ---

def test_mean_and_pstdev_edges():
    assert mean([]) == 0.0
    assert mean([2.0, 4.0]) == 3.0
    assert pstdev([]) == 0.0
    assert pstdev([7.0]) == 0.0
    assert pstdev([10.0, 30.0]) == 10.0  # population, not sample


def test_round_half_up():
    assert round_half_up(74.5) == 75
    assert round_half_up(34.5) == 35
    assert round_half_up(0.4) == 0
    assert round_half_up(99.6) == 100


# --- empty batch ---

def test_empty_batch_yields_default_snapshot():
    snap = compute_metrics([], now=1234.5)

    assert snap.timestamp == 1234.5
    assert snap.health_score == 50
    assert snap.packet_count == 0
    assert snap.stability is DetailedStability.STABLE
    assert snap.congestion_level is CongestionLevel.LOW
    assert snap.latency_ms == snap.jitter_ms == snap.bandwidth_mbps == 0.0
    assert snap.packet_loss_percent == snap.dns_delay_ms == 0.0
    assert snap.protocol_counts == {}
    assert snap.packet_sizes == ()
    assert snap.top_applications == ()


# --- formulas ---

def test_tls_capture_summary(tls_capture):
    snap = compute_metrics(clean_packets(parse_raw_packets(tls_capture)))

    assert snap.packet_count == 2
    assert snap.protocol_counts == {"TLS": 2}
    assert list(snap.packet_sizes) == [1500, 1400]
    assert snap.bandwidth_mbps == pytest.approx(2900 * 8 / (0.5 * 1_000_000))
    assert snap.top_applications == (ApplicationUsage("HTTPS", 2900),)


def test_latency_is_mean_rtt_in_ms():
    snap = compute_metrics([_rec(ack_rtt=0.02), _rec(ack_rtt=0.04), _rec(ack_rtt=None)])
    assert snap.latency_ms == pytest.approx(30.0)


def test_jitter_is_population_stddev_of_deltas():
    snap = compute_metrics([_rec(time_delta=0.01), _rec(time_delta=0.03), _rec()])
    assert snap.jitter_ms == pytest.approx(10.0)

    single = compute_metrics([_rec(time_delta=0.5)])
    assert single.jitter_ms == 0.0


def test_bandwidth_uses_batch_time_span():
    snap = compute_metrics([_rec(time=10.0, frame_length=62_500), _rec(time=11.0, frame_length=62_500)])
    assert snap.bandwidth_mbps == pytest.approx(1.0)

    same_instant = compute_metrics([_rec(time=10.0), _rec(time=10.0)])
    assert same_instant.bandwidth_mbps == 0.0


def test_all_retransmissions_is_full_loss():
    snap = compute_metrics([_rec(is_retransmission=True) for _ in range(4)])
    assert snap.packet_loss_percent == 100.0


def test_partial_retransmissions():
    records = [_rec(is_retransmission=i == 0) for i in range(4)]
    assert compute_metrics(records).packet_loss_percent == 25.0


def test_dns_delay_uses_time_delta_of_dns_records():
    records = [
        _rec(protocol="DNS", time_delta=0.05, dns_time=0.9),
        _rec(protocol="DNS", time_delta=0.07),
        _rec(protocol="TCP", time_delta=2.0),
    ]
    assert compute_metrics(records).dns_delay_ms == pytest.approx(60.0)


def test_dns_record_without_delta_counts_as_zero_delay():
    records = [_rec(protocol="DNS", time_delta=0.06), _rec(protocol="DNS", time_delta=None)]
    assert compute_metrics(records).dns_delay_ms == pytest.approx(30.0)


def test_dns_delay_zero_without_dns_records():
    assert compute_metrics([_rec(time_delta=0.2)]).dns_delay_ms == 0.0


def test_protocol_counts_and_sizes_keep_input_order():
    records = [
        _rec(protocol="TCP", frame_length=60),
        _rec(protocol="DNS", frame_length=90),
        _rec(protocol=None, frame_length=70),
        _rec(protocol="TCP", frame_length=1500),
    ]
    snap = compute_metrics(records)
    assert snap.protocol_counts == {"TCP": 2, "DNS": 1, "Unknown": 1}
    assert snap.packet_sizes == (60, 90, 70, 1500)


def test_congestion_from_window_and_bandwidth():
    fast = [
        _rec(time=10.0, frame_length=90_000, window_size=9000.0),
        _rec(time=10.1, frame_length=90_000, window_size=9000.0),
    ]
    assert compute_metrics(fast).bandwidth_mbps > 5
    assert compute_metrics(fast).congestion_level is CongestionLevel.LOW

    slow = [_rec(time=10.0, window_size=5000.0), _rec(time=11.0, window_size=5000.0)]
    assert compute_metrics(slow).congestion_level is CongestionLevel.MODERATE

    starved = [_rec(time=10.0), _rec(time=11.0)]
    assert compute_metrics(starved).congestion_level is CongestionLevel.HIGH


@pytest.mark.parametrize(
    "window, bandwidth, expected",
    [
        (8001, 5.1, CongestionLevel.LOW),
        (8000, 5.1, CongestionLevel.MODERATE),
        (8001, 5.0, CongestionLevel.MODERATE),
        (0, 2.1, CongestionLevel.MODERATE),
        (4000, 2.0, CongestionLevel.HIGH),
    ],
)
def test_classify_congestion(window, bandwidth, expected):
    assert classify_congestion(window, bandwidth) is expected


@pytest.mark.parametrize(
    "jitter, loss, expected",
    [
        (5, 0.5, DetailedStability.STABLE),
        (5, 1.0, DetailedStability.UNSTABLE),
        (29.9, 4.9, DetailedStability.UNSTABLE),
        (30, 0, DetailedStability.VERY_UNSTABLE),
        (5, 5, DetailedStability.VERY_UNSTABLE),
    ],
)
def test_classify_stability(jitter, loss, expected):
    assert classify_stability(jitter, loss) is expected


def test_stability_label_text():
    assert DetailedStability.VERY_UNSTABLE.value == "Very Unstable"


def test_health_score_stays_in_range_for_bad_and_good_batches():
    terrible = [
        _rec(time=float(t), ack_rtt=5.0, time_delta=float(t % 3), is_retransmission=True, protocol="DNS")
        for t in range(1, 20)
    ]
    great = [
        _rec(time=10.0 + t * 0.001, frame_length=1500, ack_rtt=0.001, time_delta=0.001, window_size=65535.0)
        for t in range(50)
    ]
    for batch in (terrible, great):
        score = compute_metrics(batch).health_score
        assert 1 <= score <= 100

    assert compute_metrics(terrible).health_score == 1
    assert compute_metrics(terrible).stability is DetailedStability.VERY_UNSTABLE
