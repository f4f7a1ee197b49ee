import io

from rich.console import Console

from netscope.cli.render import host_line, host_table, interface_table, port_table, wifi_table
from netscope.scan import HostResult, PortScanResult
from netscope.system.interfaces import InterfaceInfo
from netscope.system.wifi import WifiNetwork


def _render(renderable, **kwargs):
    console = Console(file=io.StringIO(), width=120)
    console.print(renderable, **kwargs)
    return console.file.getvalue()


def test_wifi_table_keeps_bracketed_ssid_literal():
    out = _render(wifi_table([WifiNetwork("[/x]", -40, "6", "[bold]WPA2", rssi=True)]))
    assert "[/x]" in out
    assert "[bold]WPA2" in out


def test_host_table_keeps_bracketed_hostname_literal():
    out = _render(host_table([HostResult("10.0.0.3", hostname="[/evil]", response_time=1.0)]))
    assert "[/evil]" in out


def test_host_line_printed_without_markup():
    line = host_line(HostResult("10.0.0.3", hostname="[red]box[/red]", response_time=1.0))
    assert "[red]box[/red]" in _render(line, markup=False)


def test_port_table_title_and_services():
    out = _render(port_table(PortScanResult("[/h]", [(22, True), (23, False)])))
    assert "Ports on [/h]" in out
    assert "SSH" in out
    assert "Telnet" not in out
    out = _render(port_table(PortScanResult("h", [(23, False)]), show_closed=True))
    assert "Telnet" in out


def test_interface_table():
    iface = InterfaceInfo("eth0", "192.168.1.4", "255.255.255.0")
    out = _render(interface_table([(iface, "[/dhcp]")]))
    assert "eth0" in out
    assert "[/dhcp]" in out
