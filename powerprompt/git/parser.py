"""Pure functions to parse git porcelain v2 status output."""

from powerprompt.git.models import RepoStatus

DETACHED_HEAD = "(detached)"
SHORT_OID_LENGTH = 8


def parse_headers(raw: str) -> tuple[dict[str, str], bool]:
    """Collect ``# key value`` headers and report whether any entry line was seen.

    Scanning stops at the first non-header, non-empty line since a single
    changed path is enough to call the worktree dirty.
    """
    headers: dict[str, str] = {}
    dirty = False

    for line in raw.splitlines():
        if line.startswith("#"):
            parts = line.split(" ", 2)
            if len(parts) == 3:
                headers[parts[1]] = parts[2]
        elif line:
            dirty = True
            break

    return headers, dirty


def parse_divergence(value: str) -> tuple[int, int] | None:
    """Parse a ``branch.ab`` value like ``+3 -1`` into (ahead, behind)."""
    parts = value.split()
    if len(parts) != 2:
        return None
    ahead_part, behind_part = parts
    if not (ahead_part.startswith("+") and behind_part.startswith("-")):
        return None
    ahead_digits = ahead_part[1:]
    behind_digits = behind_part[1:]
    if not (ahead_digits.isdigit() and behind_digits.isdigit()):
        return None
    return int(ahead_digits), int(behind_digits)


def parse_status(raw: str) -> RepoStatus | None:
    """Parse ``git status --porcelain=v2 --branch`` output.

    Returns None when no ``branch.head`` header is present, which means the
    output did not come from a git worktree.
    """
    headers, dirty = parse_headers(raw)

    head = headers.get("branch.head")
    if head is None:
        return None

    detached = head == DETACHED_HEAD
    if detached:
        oid = headers.get("branch.oid")
        if oid is not None:
            head = oid[:SHORT_OID_LENGTH]

    ahead: int | None = None
    behind: int | None = None
    ab = headers.get("branch.ab")
    if ab is not None:
        divergence = parse_divergence(ab)
        if divergence is not None:
            ahead, behind = divergence

    return RepoStatus(
        head=head,
        detached=detached,
        dirty=dirty,
        upstream=headers.get("branch.upstream"),
        ahead=ahead,
        behind=behind,
    )
