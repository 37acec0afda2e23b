"""Parse the exported XML files into normalized record models."""
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Tuple

from src.errors import SourceParseError, SourceReadError
from src.models.records import CustomField, Organization, Ticket, User

logger = logging.getLogger(__name__)

TICKETS_FILE = "tickets.xml"
USERS_FILE = "users.xml"
ORGANIZATIONS_FILE = "organizations.xml"


def _is_nil(elem: ET.Element) -> bool:
    return elem.get("nil", "").lower() == "true"


def _scalar(elem: Optional[ET.Element]) -> Optional[str]:
    """Stripped element text, or None for a missing, blank, or nil element."""
    if elem is None or _is_nil(elem):
        return None
    text = (elem.text or "").strip()
    return text or None


def _collection(parent: ET.Element, tag: str) -> List[str]:
    """
    Flatten every ``<tag>`` under *parent* into one list of entries.

    A ``<tag>`` with children contributes one entry per child (its text, or
    its tag name when the child carries no text). A childless ``<tag>``
    contributes its text as a single entry. Empty elements contribute nothing.
    """
    entries: List[str] = []
    for elem in parent.findall(tag):
        if _is_nil(elem):
            continue
        children = list(elem)
        if children:
            for child in children:
                entries.append((child.text or "").strip() or child.tag)
        else:
            text = (elem.text or "").strip()
            if text:
                entries.append(text)
    return entries


def _custom_field(entry: ET.Element) -> CustomField:
    value_elem = entry.find("value")
    if value_elem is None or _is_nil(value_elem):
        value = None
    else:
        value = (value_elem.text or "").strip()
    return CustomField(id=_scalar(entry.find("id")), value=value)


def _custom_fields(ticket_elem: ET.Element) -> List[CustomField]:
    fields: List[CustomField] = []
    for container in ticket_elem.findall("custom_fields"):
        # Either the element is itself an {id, value} entry or it wraps several
        if container.find("id") is not None or container.find("value") is not None:
            fields.append(_custom_field(container))
        else:
            fields.extend(_custom_field(entry) for entry in container)
    return fields


def _read_root(path: Path, root_tag: str) -> Optional[ET.Element]:
    """
    Read *path* as UTF-8 and parse it, checking the root element tag.

    Returns:
        The root element, or None when the file holds only whitespace.

    Raises:
        SourceReadError: If the file is missing, unreadable, or not UTF-8.
        SourceParseError: If the content is not well-formed XML or the root
            element is not ``<root_tag>``.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(path, str(e)) from e

    if not text.strip():
        logger.warning(f"{path.name} is empty; treating it as zero records")
        return None

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise SourceParseError(path, f"malformed XML: {e}") from e

    if root.tag != root_tag:
        raise SourceParseError(
            path, f"expected root element <{root_tag}>, found <{root.tag}>"
        )
    return root


def load_tickets(path: Path) -> List[Ticket]:
    """Load ``<ticket>`` records from a tickets export."""
    root = _read_root(path, "tickets")
    if root is None:
        return []

    tickets = [
        Ticket(
            brand_id=_scalar(elem.find("brand_id")),
            attachments=_collection(elem, "attachments"),
            cc_users=_collection(elem, "cc_users"),
            custom_fields=_custom_fields(elem),
        )
        for elem in root.iterfind("ticket")
    ]
    logger.info(f"Loaded {len(tickets)} tickets from {path.name}")
    return tickets


def load_users(path: Path) -> List[User]:
    """Load ``<user>`` records from a users export."""
    root = _read_root(path, "users")
    if root is None:
        return []

    users = [
        User(organization_id=_scalar(elem.find("organization_id")))
        for elem in root.iterfind("user")
    ]
    logger.info(f"Loaded {len(users)} users from {path.name}")
    return users


def load_organizations(path: Path) -> List[Organization]:
    """Load ``<organization>`` records from an organizations export."""
    root = _read_root(path, "organizations")
    if root is None:
        return []

    organizations = [
        Organization(id=_scalar(elem.find("id")))
        for elem in root.iterfind("organization")
    ]
    logger.info(f"Loaded {len(organizations)} organizations from {path.name}")
    return organizations


def load_source_records(
    source_dir: Path,
) -> Tuple[List[Ticket], List[User], List[Organization]]:
    """Load tickets, users and organizations, in that order, from *source_dir*."""
    tickets = load_tickets(source_dir / TICKETS_FILE)
    users = load_users(source_dir / USERS_FILE)
    organizations = load_organizations(source_dir / ORGANIZATIONS_FILE)
    return tickets, users, organizations
