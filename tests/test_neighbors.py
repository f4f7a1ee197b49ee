import time

from netscope.system import neighbors
from netscope.system.neighbors import normalize_mac, parse_mac


def test_normalize_mac():
    assert normalize_mac("0:1c:42:a:b:c") == "00:1C:42:0A:0B:0C"
    assert normalize_mac("aa-bb-cc-dd-ee-ff") == "AA:BB:CC:DD:EE:FF"


def test_parse_mac_linux_arp():
    output = (
        "Address                  HWtype  HWaddress           Flags Mask            Iface\n"
        "192.168.1.10             ether   3c:22:fb:12:34:56   C                     eth0\n"
    )
    assert parse_mac(output, "192.168.1.10") == "3C:22:FB:12:34:56"


def test_parse_mac_does_not_match_longer_ip():
    output = "192.168.1.100 ether 3c:22:fb:12:34:56 C eth0\n"
    assert parse_mac(output, "192.168.1.10") is None


def test_parse_mac_windows_arp():
    output = (
        "Interface: 192.168.1.5 --- 0x4\n"
        "  Internet Address      Physical Address      Type\n"
        "  192.168.1.1           a0-b1-c2-d3-e4-f5     dynamic\n"
    )
    assert parse_mac(output, "192.168.1.1") == "A0:B1:C2:D3:E4:F5"


def test_parse_mac_incomplete_entry():
    output = "? (192.168.1.7) at (incomplete) on en0 [ethernet]\n"
    assert parse_mac(output, "192.168.1.7") is None


def test_get_mac_address_falls_back_to_ip_neighbor(monkeypatch):
    calls = []

    def fake_run(cmd, timeout=2.0, **kwargs):
        calls.append(cmd[0])
        if cmd[0] == "arp":
            return None
        return "10.0.0.4 dev eth0 lladdr 52:54:00:12:34:56 REACHABLE\n"

    monkeypatch.setattr(neighbors.platform, "system", lambda: "Linux")
    monkeypatch.setattr(neighbors.shutil, "which", lambda name: "/usr/sbin/ip")
    monkeypatch.setattr(neighbors, "run_command", fake_run)
    assert neighbors.get_mac_address("10.0.0.4") == "52:54:00:12:34:56"
    assert calls == ["arp", "ip"]


def test_get_mac_address_none(monkeypatch):
    monkeypatch.setattr(neighbors, "run_command", lambda cmd, timeout=2.0, **kw: None)
    assert neighbors.get_mac_address("10.0.0.4") is None


def test_get_hostname(monkeypatch):
    monkeypatch.setattr(neighbors.socket, "gethostbyaddr", lambda ip: ("box.lan", [], [ip]))
    assert neighbors.get_hostname("10.0.0.2") == "box.lan"


def test_get_hostname_failure(monkeypatch):
    def fail(ip):
        raise OSError("no PTR")

    monkeypatch.setattr(neighbors.socket, "gethostbyaddr", fail)
    assert neighbors.get_hostname("10.0.0.2") is None


def _slow_lookup(ip):
    time.sleep(0.3)
    return "late"


async def test_async_get_hostname_timeout(monkeypatch):
    monkeypatch.setattr(neighbors, "get_hostname", _slow_lookup)
    assert await neighbors.async_get_hostname("10.0.0.2", timeout=0.05) is None


async def test_async_get_hostname(monkeypatch):
    monkeypatch.setattr(neighbors, "get_hostname", lambda ip: "box")
    assert await neighbors.async_get_hostname("10.0.0.2") == "box"
