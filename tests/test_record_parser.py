import pytest

from netmetrics import parse_raw_packets
from netmetrics.intake.record_parser import CAPTURE_FIELDS, FIELD_TABLE


FULL_HEADER = ",".join(CAPTURE_FIELDS)


@pytest.mark.parametrize("text", ["", "   \n  ", FULL_HEADER, FULL_HEADER + "\n"])
def test_blank_or_header_only_input_yields_nothing(text):
    assert parse_raw_packets(text) == []


def test_tls_capture_parses_two_records(tls_capture):
    records = parse_raw_packets(tls_capture)

    assert len(records) == 2
    first = records[0]
    assert first.time == 100.0
    assert first.source_ip == "10.0.0.1"
    assert first.dest_ip == "Unknown"  # no ip.dst column
    assert first.source_port == 443
    assert first.dest_port == 50000
    assert first.frame_length == 1500
    assert first.protocol == "TLS"
    assert records[1].frame_length == 1400


def test_every_capture_field_is_recognized():
    assert set(CAPTURE_FIELDS) <= set(FIELD_TABLE)


def test_full_row_coercions():
    row = "1700000000.25,192.168.1.2,8.8.8.8,DNS,74,51000,53,64,0x0018,65535,0.012,1,0.004,0.031"
    (rec,) = parse_raw_packets(FULL_HEADER + "\n" + row)

    assert rec.time == 1700000000.25
    assert rec.dest_ip == "8.8.8.8"
    assert rec.protocol == "DNS"
    assert rec.ttl == 64
    assert rec.tcp_flags == 0x18
    assert rec.window_size == 65535.0
    assert rec.ack_rtt == pytest.approx(0.012)
    assert rec.is_retransmission is True
    assert rec.time_delta == pytest.approx(0.004)
    assert rec.dns_time == pytest.approx(0.031)
    assert dict(rec.extra) == {}


def test_empty_numeric_fields_become_none_but_frame_length_zero():
    row = "1.0,,,,,,,,,,,,,"
    (rec,) = parse_raw_packets(FULL_HEADER + "\n" + row)

    assert rec.frame_length == 0
    assert rec.source_port is None
    assert rec.dest_port is None
    assert rec.ttl is None
    assert rec.tcp_flags is None
    assert rec.window_size is None
    assert rec.ack_rtt is None
    assert rec.time_delta is None
    assert rec.dns_time is None
    assert rec.is_retransmission is False
    # Present-but-empty labels default to "Unknown".
    assert rec.source_ip == "Unknown"
    assert rec.protocol == "Unknown"


def test_unparseable_numbers_degrade_instead_of_raising():
    text = "frame.time_epoch,frame.len,tcp.srcport,_ws.col.Protocol\nabc,xyz,port,TCP"
    (rec,) = parse_raw_packets(text)

    assert rec.time is None
    assert rec.frame_length == 0
    assert rec.source_port is None


@pytest.mark.parametrize("value", ["nan", "NaN", "inf", "-inf", "1e999"])
def test_non_finite_numbers_become_none(value):
    text = f"frame.time_epoch,tcp.analysis.ack_rtt,frame.time_delta,frame.len,_ws.col.Protocol\n{value},{value},{value},{value},TCP"
    (rec,) = parse_raw_packets(text)

    assert rec.time is None
    assert rec.ack_rtt is None
    assert rec.time_delta is None
    assert rec.frame_length == 0


def test_decimal_tcp_flags():
    (rec,) = parse_raw_packets("tcp.flags,frame.time_epoch\n24,1.0")
    assert rec.tcp_flags == 24


def test_truncated_rows_are_skipped():
    text = (
        "frame.time_epoch,ip.src,_ws.col.Protocol\n"
        "1.0,10.0.0.1,TCP\n"
        "2.0,10.0.0.1\n"
        "\n"
        "3.0,10.0.0.2,UDP\n"
    )
    records = parse_raw_packets(text)

    assert [r.time for r in records] == [1.0, 3.0]
    assert len(records) <= len(text.strip().split("\n")) - 1


def test_unknown_fields_are_kept_aside():
    text = "frame.time_epoch,http.host,_ws.col.Protocol\n5.0,example.com,HTTP"
    (rec,) = parse_raw_packets(text)

    assert rec.extra["http.host"] == "example.com"
    assert not hasattr(rec, "http.host")
    assert rec.protocol == "HTTP"


def test_udp_ports_fill_in_when_tcp_columns_are_empty():
    text = (
        "tcp.srcport,tcp.dstport,udp.srcport,udp.dstport,frame.time_epoch,_ws.col.Protocol\n"
        ",,5353,53,1.0,DNS\n"
        "44321,443,,,2.0,TLS\n"
    )
    dns, tls = parse_raw_packets(text)

    assert (dns.source_port, dns.dest_port) == (5353, 53)
    assert (tls.source_port, tls.dest_port) == (44321, 443)


def test_crlf_line_endings_and_padding():
    text = " frame.time_epoch , _ws.col.Protocol \r\n 1.5 , DNS \r\n"
    (rec,) = parse_raw_packets(text)

    assert rec.time == 1.5
    assert rec.protocol == "DNS"


def test_missing_protocol_column_leaves_protocol_unset():
    (rec,) = parse_raw_packets("frame.time_epoch,frame.len\n1.0,60")
    assert rec.protocol is None
