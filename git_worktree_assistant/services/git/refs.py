"""Ref listing service for git-worktree-assistant."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import List, Optional

from git_worktree_assistant.constants import (
    LOCAL_REF_NAMESPACE,
    REF_FIELD_COUNT,
    REF_FIELD_DELIMITER,
    REF_FORMAT,
    REMOTE_REF_NAMESPACE,
)
from git_worktree_assistant.exceptions import RefParseError
from git_worktree_assistant.models.ref import GitRef, RefSource
from git_worktree_assistant.services.git.runner import ProcessRunner
from git_worktree_assistant.logging_config import get_logger

logger = get_logger(__name__)


def parse_ref_date(value: str) -> Optional[datetime]:
    """Parse an ISO 8601 author date, returning None if git printed something else."""
    value = value.strip()
    # Newer git prints UTC as "Z" in iso-strict dates
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.debug(f"Invalid date string: {value!r}")
        return None


def parse_ref_line(line: str, source: RefSource) -> GitRef:
    """Parse one for-each-ref line produced with REF_FORMAT.

    The subject is the last field and may itself contain the delimiter,
    so everything after the sixth delimiter belongs to it.

    Raises:
        RefParseError: If the line has fewer fields than the format prints
    """
    fields = line.split(REF_FIELD_DELIMITER)
    if len(fields) < REF_FIELD_COUNT:
        raise RefParseError(line, len(fields))

    object_id, name, upstream, is_head, date, author = fields[: REF_FIELD_COUNT - 1]
    message = REF_FIELD_DELIMITER.join(fields[REF_FIELD_COUNT - 1 :])

    return GitRef(
        source=source,
        id=object_id,
        name=name,
        upstream=upstream or None,
        is_head=is_head == "true",
        author=author,
        message=message,
        date=parse_ref_date(date),
    )


def is_symbolic_remote_head(ref: GitRef) -> bool:
    """True for aliases like ``origin/HEAD`` that are not branches of their own."""
    return ref.is_remote and ref.name.endswith("/HEAD")


class RefService:
    """Service for listing local and remote-tracking refs."""

    def __init__(self, runner: ProcessRunner):
        self.runner = runner

    def _list_namespace(self, cwd: str, namespace: str, source: RefSource) -> List[GitRef]:
        output = self.runner.run_captured(
            [
                "for-each-ref",
                "--sort=-authordate",
                f"--format={REF_FORMAT}",
                namespace,
            ],
            cwd,
        )
        refs = []
        for line in output.split("\n"):
            if not line.strip():
                continue
            ref = parse_ref_line(line, source)
            if is_symbolic_remote_head(ref):
                continue
            refs.append(ref)
        return refs

    def list_local_refs(self, cwd: str) -> List[GitRef]:
        return self._list_namespace(cwd, LOCAL_REF_NAMESPACE, RefSource.LOCAL)

    def list_remote_refs(self, cwd: str) -> List[GitRef]:
        return self._list_namespace(cwd, REMOTE_REF_NAMESPACE, RefSource.REMOTE)

    def list_refs(self, cwd: str) -> List[GitRef]:
        """List local then remote refs, each most recent author date first.

        Raises:
            CommandError: If either listing fails
            RefParseError: If git printed a malformed line
        """
        with ThreadPoolExecutor(max_workers=2) as executor:
            local_future = executor.submit(self.list_local_refs, cwd)
            remote_future = executor.submit(self.list_remote_refs, cwd)
            refs = local_future.result() + remote_future.result()

        logger.debug(f"Found {len(refs)} refs")
        return refs
