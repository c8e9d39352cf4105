"""Git status interpretation.

The git MCP server only returns the human-readable ``git status`` text, so
the repository state is recovered by matching line patterns. Two strategies
share the StatusParser interface:

- SectionStatusParser ("sections", default): tracks the section headers so
  that ``modified:`` entries under "Changes not staged for commit" are
  reported as unstaged.
- LegacyStatusParser ("legacy"): classifies each line on its own. Every
  ``modified:`` entry is reported as staged, so the unstaged list stays empty.

Contains:
- RepositoryStatus: Branch name plus staged/unstaged/untracked file lists
- parse_status: Parse status text (and optional log text) into a RepositoryStatus
- extract_branch: Find the "On branch <name>" line
- get_status_parser: Look up a strategy by name
"""

import re
from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from smartcommit.config import DEFAULT_STATUS_PARSER

DEFAULT_BRANCH = "main"

HEADER_STAGED = "Changes to be committed:"
HEADER_UNSTAGED = "Changes not staged for commit:"
HEADER_UNTRACKED = "Untracked files:"
SECTION_HEADERS = (HEADER_STAGED, HEADER_UNSTAGED, HEADER_UNTRACKED)

STAGED_PATTERN = re.compile(r"^\s+(new file|modified|deleted):\s+(.+)$")
UNSTAGED_PATTERN = re.compile(r"^\s+modified:\s+(.+)$")
ENTRY_PATTERN = re.compile(r"^\s+(new file|modified|deleted|renamed|typechange):\s+(.+)$")
BARE_PATH_PATTERN = re.compile(r"^\s+(.+)$")
BRANCH_PATTERN = re.compile(r"On branch (.+)")


class RepositoryStatus(BaseModel):
    """Structured view of a repository's working state.

    Attributes:
        branch: Current branch name ("main" when it cannot be determined).
        staged: Paths added to the next commit, in status order.
        unstaged: Tracked paths modified but not added, in status order.
        untracked: Paths not yet known to git, in status order.
    """

    branch: str = DEFAULT_BRANCH
    staged: list[str] = Field(default_factory=list)
    unstaged: list[str] = Field(default_factory=list)
    untracked: list[str] = Field(default_factory=list)

    @property
    def has_staged_changes(self) -> bool:
        return bool(self.staged)


def extract_branch(*texts: str) -> str:
    """Extract the branch name from the first text containing "On branch <name>".

    Args:
        texts: Candidate texts (log output, status output), searched in order.

    Returns:
        The branch name, or "main" if none of the texts names one.
    """
    for text in texts:
        if not text:
            continue
        match = BRANCH_PATTERN.search(text)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return DEFAULT_BRANCH


def _header_of(line: str) -> str | None:
    for header in SECTION_HEADERS:
        if header in line:
            return header
    return None


def _bare_path(line: str) -> str | None:
    """Return the trimmed path for an indented line without a colon."""
    if ":" in line or not BARE_PATH_PATTERN.match(line):
        return None
    path = line.strip()
    if not path or path.startswith("("):
        return None
    return path


def _entry_path(kind: str, path: str) -> str:
    path = path.strip()
    if kind == "renamed" and " -> " in path:
        return path.split(" -> ", 1)[1].strip()
    return path


class StatusParser(ABC):
    """Strategy turning git status text into file lists."""

    name: str = ""

    @abstractmethod
    def classify(self, raw_text: str) -> tuple[list[str], list[str], list[str]]:
        """Classify status lines.

        Args:
            raw_text: Human-readable git status output.

        Returns:
            A (staged, unstaged, untracked) tuple of path lists.
        """
        pass

    @staticmethod
    def _classify_line(line: str, staged: list[str], unstaged: list[str], untracked: list[str]) -> None:
        # Line-by-line rules, used on their own by the legacy parser
        staged_match = STAGED_PATTERN.match(line)
        if staged_match:
            staged.append(staged_match.group(2).strip())
            return

        unstaged_match = UNSTAGED_PATTERN.match(line)
        if unstaged_match and unstaged_match.group(1).strip() not in staged:
            unstaged.append(unstaged_match.group(1).strip())
            return

        path = _bare_path(line)
        if path:
            untracked.append(path)


class LegacyStatusParser(StatusParser):
    """Classify each line independently of the section it appears in.

    Note: the unstaged rule can never fire because the staged rule already
    matches every ``modified:`` line. Kept for compatibility with clients
    that expect all changed tracked files in ``staged``.
    """

    name = "legacy"

    def classify(self, raw_text: str) -> tuple[list[str], list[str], list[str]]:
        staged: list[str] = []
        unstaged: list[str] = []
        untracked: list[str] = []

        for line in (raw_text or "").split("\n"):
            if not line.strip() or _header_of(line):
                continue
            self._classify_line(line, staged, unstaged, untracked)

        return staged, unstaged, untracked


class SectionStatusParser(StatusParser):
    """Classify entries by the section header they follow.

    Lines appearing before any section header are classified with the
    legacy line rules.
    """

    name = "sections"

    def classify(self, raw_text: str) -> tuple[list[str], list[str], list[str]]:
        staged: list[str] = []
        unstaged: list[str] = []
        untracked: list[str] = []
        section = None

        for line in (raw_text or "").split("\n"):
            if not line.strip():
                continue

            header = _header_of(line)
            if header:
                section = header
                continue

            if section is None:
                self._classify_line(line, staged, unstaged, untracked)
                continue

            if section == HEADER_UNTRACKED:
                path = _bare_path(line)
                if path:
                    untracked.append(path)
                continue

            entry = ENTRY_PATTERN.match(line)
            if not entry:
                continue
            target = staged if section == HEADER_STAGED else unstaged
            target.append(_entry_path(entry.group(1), entry.group(2)))

        return staged, unstaged, untracked


_PARSERS: dict[str, type[StatusParser]] = {
    LegacyStatusParser.name: LegacyStatusParser,
    SectionStatusParser.name: SectionStatusParser,
}


def get_status_parser(name: str | None = None) -> StatusParser:
    """Get a status parser by name.

    Args:
        name: "sections" or "legacy". Defaults to DEFAULT_STATUS_PARSER.

    Raises:
        ValueError: If the name is not a known strategy.
    """
    name = name or DEFAULT_STATUS_PARSER
    try:
        return _PARSERS[name]()
    except KeyError:
        raise ValueError(f"Unsupported status parser: {name}")


def parse_status(raw_text: str, log_text: str = "", *, strategy: str | None = None) -> RepositoryStatus:
    """Parse human-readable git status text into a RepositoryStatus.

    Never raises on unparseable input; the worst case is empty lists and
    the "main" branch.

    Args:
        raw_text: Output of the git status tool.
        log_text: Output of the git log tool, searched first for the branch name.
        strategy: Parser name ("sections" or "legacy").

    Returns:
        The parsed RepositoryStatus.
    """
    staged, unstaged, untracked = get_status_parser(strategy).classify(raw_text or "")
    return RepositoryStatus(
        branch=extract_branch(log_text, raw_text),
        staged=staged,
        unstaged=unstaged,
        untracked=untracked,
    )
