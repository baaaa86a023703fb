# app/core/file_tree.py
import logging
from collections import deque
from typing import Any, Dict, Iterable, List

from app.schemas.file import FileNode

logger = logging.getLogger(__name__)


def build_file_tree(files: Iterable[Any]) -> List[FileNode]:
    """
    Convert a flat list of file records into a forest of FileNode objects.

    Children are attached in input order (the caller sorts by name). A record
    whose parent_id is not part of the collection is promoted to a root and a
    warning is logged; the builder never drops or duplicates a record.
    """
    files = list(files)
    nodes: Dict[str, FileNode] = {}
    for record in files:
        nodes[record.id] = FileNode.from_record(record)

    roots: List[FileNode] = []
    for record in files:
        node = nodes[record.id]
        if record.parent_id:
            parent = nodes.get(record.parent_id)
            if parent is not None and parent is not node:
                parent.children.append(node)
                continue
            logger.warning(
                "File %s (%s) references missing parent %s; treating it as a root",
                record.id, record.path, record.parent_id,
            )
        roots.append(node)
    return roots


def collect_descendant_ids(files: Iterable[Any], root_id: str) -> List[str]:
    """
    Ids of every record below root_id (not including root_id itself), found by
    walking parent_id links breadth-first.
    """
    children_of: Dict[str, List[str]] = {}
    for record in files:
        if record.parent_id:
            children_of.setdefault(record.parent_id, []).append(record.id)

    found: List[str] = []
    seen = {root_id}
    queue = deque([root_id])
    while queue:
        current = queue.popleft()
        for child_id in children_of.get(current, []):
            if child_id in seen:
                continue
            seen.add(child_id)
            found.append(child_id)
            queue.append(child_id)
    return found
