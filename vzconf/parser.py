"""Domain document parser - XML description to validated Definition.

Sample document:

    <domain type="openvz">
      <name>101</name>
      <uuid>86c12009-e591-a159-6e9f-91d18b85ef78</uuid>
      <vcpu>2</vcpu>
      <devices>
        <filesystem type="template">
          <source name="fedora-core-5-i386"/>
          <quota type="size" max="10000"/>
          <quota type="inodes" max="100"/>
        </filesystem>
        <interface type="bridge">
          <source bridge="vzbr0"/>
        </interface>
      </devices>
    </domain>
"""

import logging
import uuid
import xml.etree.ElementTree as ET
from typing import Callable, Optional

from .config import NAME_MAX, RESERVED_ID_LIMIT, TEMPLATE_MAX
from .domain.definition import Definition, FilesystemSpec, NetInterface
from .errors import ErrorSink, LoggingErrorSink, ParseError, ParseErrorCode, report
from .network import parse_interface
from .util import parse_int, parse_ulong, parse_uuid

logger = logging.getLogger(__name__)

DOMAIN_TYPE = "openvz"


def _text(element: Optional[ET.Element]) -> str:
    """XPath string() of an element: all descendant text, or ''."""
    if element is None:
        return ""
    return "".join(element.itertext())


class DefinitionParser:
    """Turns domain documents into Definitions.

    Attributes:
        sink: Receives a report for every rejected document
    """

    def __init__(
        self,
        sink: Optional[ErrorSink] = None,
        uuid_factory: Callable[[], uuid.UUID] = uuid.uuid4,
        interface_parser: Callable[[ET.Element], NetInterface] = parse_interface,
    ):
        self.sink = sink or LoggingErrorSink()
        self._uuid_factory = uuid_factory
        self._interface_parser = interface_parser

    def parse_string(self, xml_text: str, display_name: Optional[str] = None) -> Definition:
        """Parse XML text and validate it as a domain document.

        Args:
            xml_text: The document
            display_name: Name used in error messages (defaults to domain.xml)
        """
        display_name = display_name or "domain.xml"
        try:
            root = ET.fromstring(xml_text)
        except ET.ParseError as e:
            raise self._fail(ParseErrorCode.XML_ERROR, f"{display_name}: {e}") from e
        return self.parse(root)

    def parse(self, root: ET.Element) -> Definition:
        """Validate a parsed domain document.

        Raises:
            ParseError: The document is rejected; nothing is returned or kept
        """
        if root is None or root.tag != "domain":
            raise self._fail(ParseErrorCode.INVALID_ROOT, "incorrect root element")

        domain_type = root.get("type")
        if domain_type is None:
            raise self._fail(ParseErrorCode.INVALID_TYPE, "missing domain type attribute")
        if domain_type != DOMAIN_TYPE:
            raise self._fail(
                ParseErrorCode.INVALID_TYPE, f"invalid domain type attribute '{domain_type}'"
            )

        name = self._parse_name(root)
        domain_uuid = self._parse_uuid(root)

        # Absent and malformed vcpu counts both mean "runtime default"
        vcpus = parse_ulong(_text(root.find("vcpu"))) or 0

        filesystem = self._parse_filesystem(root)
        nets = self._parse_interfaces(root)

        definition = Definition(
            name=name,
            uuid=domain_uuid,
            vcpus=vcpus,
            filesystem=filesystem,
            nets=nets,
        )
        logger.debug(f"Parsed definition for VE {name} ({len(nets)} interfaces)")
        return definition

    def _fail(self, code: ParseErrorCode, message: str) -> ParseError:
        return report(self.sink, ParseError(code, message))

    def _parse_name(self, root: ET.Element) -> str:
        name = _text(root.find("name"))
        if not name:
            raise self._fail(ParseErrorCode.INVALID_NAME, "invalid domain name")
        if len(name) > NAME_MAX:
            raise self._fail(
                ParseErrorCode.INVALID_NAME,
                f"domain name '{name[:NAME_MAX]}...' longer than {NAME_MAX} characters",
            )

        # The name doubles as the VPS id
        veid = parse_int(name, default=None)
        if veid is None:
            raise self._fail(
                ParseErrorCode.INVALID_NAME, f"domain name '{name}' is not a VPS ID"
            )
        if veid <= RESERVED_ID_LIMIT:
            raise self._fail(
                ParseErrorCode.RESERVED_ID,
                f"VPS ID Error (must be an integer greater than {RESERVED_ID_LIMIT})",
            )
        return name

    def _parse_uuid(self, root: ET.Element) -> uuid.UUID:
        text = _text(root.find("uuid"))
        if not text:
            try:
                return self._uuid_factory()
            except OSError as e:
                raise self._fail(
                    ParseErrorCode.UUID_GENERATION_FAILED, f"Failed to generate UUID: {e}"
                ) from e
        try:
            return parse_uuid(text)
        except ValueError as e:
            raise self._fail(ParseErrorCode.MALFORMED_UUID, "malformed uuid element") from e

    def _parse_filesystem(self, root: ET.Element) -> FilesystemSpec:
        nodes = root.findall("devices/filesystem")
        if not nodes:
            raise self._fail(ParseErrorCode.BAD_FILESYSTEM_COUNT, "missing filesystem tag")
        if len(nodes) > 1:
            raise self._fail(
                ParseErrorCode.BAD_FILESYSTEM_COUNT, "There should be only one filesystem tag"
            )

        fs = nodes[0]
        fs_type = fs.get("type")
        if fs_type is None:
            raise self._fail(ParseErrorCode.BAD_FILESYSTEM_TYPE, "missing type attribute")
        if fs_type != "template":
            raise self._fail(
                ParseErrorCode.BAD_FILESYSTEM_TYPE, f"Unknown type attribute {fs_type}"
            )

        template = ""
        disk_size = 0
        disk_inodes = 0
        for child in fs:
            if child.tag == "source":
                source_name = child.get("name")
                if source_name is not None:
                    template = source_name[:TEMPLATE_MAX - 1]
            elif child.tag == "quota":
                quota_type = child.get("type")
                quota_max = child.get("max")
                if quota_max is None:
                    continue
                # Unparsable limits fall back to 0, same as "not declared"
                if quota_type == "size":
                    disk_size = parse_int(quota_max)
                elif quota_type == "inodes":
                    disk_inodes = parse_int(quota_max)

        return FilesystemSpec(template=template, disk_size=disk_size, disk_inodes=disk_inodes)

    def _parse_interfaces(self, root: ET.Element) -> list[NetInterface]:
        nets = []
        for element in root.findall("devices/interface"):
            try:
                nets.append(self._interface_parser(element))
            except ParseError as e:
                report(self.sink, e)
                raise
        return nets


def parse_definition(root: ET.Element, sink: Optional[ErrorSink] = None) -> Definition:
    """Validate a parsed domain document with a default parser."""
    return DefinitionParser(sink).parse(root)


def parse_definition_string(
    xml_text: str, display_name: Optional[str] = None, sink: Optional[ErrorSink] = None
) -> Definition:
    """Parse and validate domain XML text with a default parser."""
    return DefinitionParser(sink).parse_string(xml_text, display_name)
