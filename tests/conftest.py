"""Shared test fixtures."""

import pytest

from vzconf.conffile import ConfigLineStore
from vzconf.errors import RecordingErrorSink


FILESYSTEM = """
    <filesystem type="template">
      <source name="fedora-core-5-i386"/>
      <quota type="size" max="10000"/>
      <quota type="inodes" max="100"/>
    </filesystem>"""


def _domain_xml(name="101", uuid=None, vcpu=None, devices=FILESYSTEM, extra="",
                domain_type="openvz"):
    """Build a domain document.

    extra is appended to the devices section; pass devices="" to drop the
    filesystem.
    """
    parts = [f'<domain type="{domain_type}">', f"  <name>{name}</name>"]
    if uuid is not None:
        parts.append(f"  <uuid>{uuid}</uuid>")
    if vcpu is not None:
        parts.append(f"  <vcpu>{vcpu}</vcpu>")
    parts.append(f"  <devices>{devices}{extra}\n  </devices>")
    parts.append("</domain>")
    return "\n".join(parts)


@pytest.fixture
def sink():
    """Error sink that records every report."""
    return RecordingErrorSink()


@pytest.fixture
def conf_dir(tmp_path):
    """An existing OpenVZ config directory."""
    path = tmp_path / "vz" / "conf"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def store(conf_dir, tmp_path, sink):
    """ConfigLineStore whose first candidate is missing and second exists."""
    return ConfigLineStore([tmp_path / "missing", conf_dir], sink=sink)


@pytest.fixture
def write_conf(conf_dir):
    """Write <veid>.conf with the given content."""
    def write(veid, content):
        path = conf_dir / f"{veid}.conf"
        path.write_text(content)
        return path
    return write


@pytest.fixture
def domain_xml():
    """Builder for domain documents."""
    return _domain_xml
