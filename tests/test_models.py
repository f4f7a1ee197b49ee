import pytest

from netscope.errors import TargetError
from netscope.scan import HostResult, PortScanResult, ScanProgress, ScanTarget
from netscope.scan.models import network_prefix


def test_network_prefix():
    assert network_prefix("192.168.1.100") == "192.168.1"
    assert network_prefix("10.0.0") == "10.0.0"
    assert network_prefix(" 10.0.0. ") == "10.0.0"


def test_port_target_clamps_and_swaps():
    target = ScanTarget.for_ports("example.org", 70000, 0)
    assert (target.start, target.end) == (1, 65535)
    target = ScanTarget.for_ports("example.org", 90, 20)
    assert (target.start, target.end) == (20, 90)
    assert target.size == 71
    assert list(ScanTarget.for_ports("h", 5, 7)) == [5, 6, 7]


def test_port_target_rejects_empty_host():
    with pytest.raises(TargetError):
        ScanTarget.for_ports("  ", 1, 10)


def test_subnet_target():
    target = ScanTarget.for_subnet("192.168.1.100", 0, 300)
    assert target == ScanTarget("192.168.1", 1, 254)
    assert target.size == 254


@pytest.mark.parametrize("value", ["", "192.168", "10.0.x", "300.1.1"])
def test_subnet_target_rejects_bad_prefix(value):
    with pytest.raises(TargetError):
        ScanTarget.for_subnet(value, 1, 10)


def test_target_error_is_value_error():
    with pytest.raises(ValueError):
        ScanTarget.for_subnet("nope", 1, 2)


def test_scan_progress():
    assert ScanProgress(5, 10).fraction == 0.5
    assert not ScanProgress(5, 10).done
    assert ScanProgress(10, 10).done
    assert ScanProgress(0, 0).fraction == 1.0


def test_port_scan_result_first_write_wins_and_sorted():
    result = PortScanResult("h", [(3, False), (1, True), (2, False), (3, True)])
    assert list(result) == [1, 2, 3]
    assert result[3] is False
    assert result.open_ports == [1]
    assert len(result) == 3
    assert result.as_dict() == {"host": "h", "scanned": 3, "open_ports": [1]}


def test_port_scan_result_is_read_only():
    result = PortScanResult("h", [(1, True)])
    with pytest.raises(TypeError):
        result[1] = False  # type: ignore[index]


def test_host_result_ports_sorted_unique():
    host = HostResult("10.0.0.1", open_ports=(443, 22, 443, 80))
    assert host.open_ports == (22, 80, 443)
    assert host.ports_display() == "22(SSH),80(HTTP),443(HTTPS)"


def test_host_result_ports_display_unknown_port():
    assert HostResult("10.0.0.1", open_ports=(5000,)).ports_display() == "5000"


def test_host_result_as_dict_omits_missing_fields():
    data = HostResult("10.0.0.1", response_time=1.5).as_dict()
    assert data == {"ip": "10.0.0.1", "alive": True, "response_time": 1.5, "ports": []}
    data = HostResult("10.0.0.1", hostname="box", mac="AA:BB:CC:DD:EE:FF").as_dict()
    assert data["hostname"] == "box"
    assert data["mac"] == "AA:BB:CC:DD:EE:FF"
