from netmetrics import ApplicationUsage, PacketRecord, PipelineConfig, identify_top_applications
from netmetrics.pipeline.applications import infer_application


def _rec(sport=None, dport=None, length=100):
    return PacketRecord(time=1.0, protocol="TCP", source_port=sport, dest_port=dport, frame_length=length)


def test_known_port_and_dynamic_port():
    records = [_rec(dport=443, length=1000), _rec(dport=9999, length=500)]
    assert identify_top_applications(records) == [
        ApplicationUsage(application="HTTPS", total_bytes=1000),
        ApplicationUsage(application="App-Port-9999", total_bytes=500),
    ]


def test_source_port_wins_over_destination():
    assert infer_application(22, 80) == "SSH"
    assert infer_application(51000, 80) == "HTTP"
    assert infer_application(6379, None) == "Redis"


def test_dynamic_range_is_exclusive():
    assert infer_application(None, 1024) == "Unknown"
    assert infer_application(None, 1025) == "App-Port-1025"
    assert infer_application(None, 49150) == "App-Port-49150"
    assert infer_application(None, 49151) == "Unknown"
    assert infer_application(None, None) == "Unknown"
    assert infer_application(60000, 60001) == "Unknown"


def test_bytes_accumulate_per_application():
    records = [_rec(sport=443, dport=50000, length=1500), _rec(sport=50000, dport=443, length=60)]
    assert identify_top_applications(records) == [ApplicationUsage("HTTPS", 1560)]


def test_sorted_descending_and_truncated():
    records = [_rec(dport=port, length=size) for port, size in [
        (22, 10), (80, 50), (53, 30), (3306, 40), (5432, 20), (27017, 60), (25, 5),
    ]]
    top = identify_top_applications(records, top_n=3)

    assert [a.application for a in top] == ["MongoDB", "HTTP", "MySQL"]
    assert len(identify_top_applications(records)) == 5
    totals = [a.total_bytes for a in identify_top_applications(records, top_n=10)]
    assert totals == sorted(totals, reverse=True)


def test_ties_keep_first_seen_order():
    records = [_rec(dport=3306, length=100), _rec(dport=6379, length=100), _rec(dport=21, length=100)]
    assert [a.application for a in identify_top_applications(records)] == ["MySQL", "Redis", "FTP"]


def test_empty_input_and_zero_limit():
    assert identify_top_applications([]) == []
    assert identify_top_applications([_rec(dport=80)], top_n=0) == []


def test_port_map_and_default_limit_come_from_config():
    cfg = PipelineConfig(application_port_map={9000: "Metrics"}, top_n=1)
    records = [_rec(dport=9000, length=10), _rec(dport=443, length=5)]

    assert identify_top_applications(records, cfg=cfg) == [ApplicationUsage("Metrics", 10)]
