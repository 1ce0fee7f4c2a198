"""
Parsing of the user guide page (docs/ml-features.md).

The page is a markdown document with:

- a YAML front-matter block between two `---` lines (layout, title)
- a table-of-contents placeholder, a list item directly followed by
  a `{:toc}` line, which the site generator replaces with links to the
  page's section headers
- prose and fenced code samples, one block per language.

`load_page` reads the file into a `GuidePage`, which exposes the pieces
the editorial checks in `mlfeatures.guide.checks` need.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import yaml


_FENCE_RE = re.compile(r"^(```|~~~)\s*([\w+-]*)\s*$")
_HEADER_RE = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$")
_LINK_RE = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)\s]+)(?:\s+\"[^\"]*\")?\)")
_TOC_MARKER = "{:toc}"


@dataclass
class CodeBlock:
    """A fenced code sample: language tag, source, and 1-based line of
    its first code line in the page file."""

    language: str
    code: str
    line: int


@dataclass
class Header:
    level: int
    text: str
    anchor: str
    line: int = 0


@dataclass
class Link:
    text: str
    target: str
    line: int


def slugify(text: str) -> str:
    """
    Anchor id the site generator (kramdown) assigns to a header: leading
    non-letters dropped, anything but ASCII letters, digits, spaces and
    dashes removed, spaces turned into dashes, lowercased.
    """
    slug = re.sub(r"^[^a-zA-Z]+", "", text.strip())
    slug = re.sub(r"[^a-zA-Z0-9 -]", "", slug)
    return slug.replace(" ", "-").lower()


@dataclass
class GuidePage:
    """Parsed guide page."""

    path: str
    front_matter: Dict[str, Any]
    body: str
    body_offset: int = 0
    code_blocks: List[CodeBlock] = field(default_factory=list)

    # ------------------------------------------------------------------
    # line iteration helpers
    # ------------------------------------------------------------------

    def _prose_lines(self) -> List[Tuple[int, str]]:
        """Body lines outside fenced code, with their file line numbers."""
        lines = []
        in_fence = False
        for i, line in enumerate(self.body.splitlines()):
            if _FENCE_RE.match(line.strip()):
                in_fence = not in_fence
                continue
            if not in_fence:
                lines.append((i + 1 + self.body_offset, line))
        return lines

    # ------------------------------------------------------------------
    # public accessors
    # ------------------------------------------------------------------

    @property
    def title(self) -> Optional[str]:
        return self.front_matter.get("title")

    @property
    def layout(self) -> Optional[str]:
        return self.front_matter.get("layout")

    def headers(self) -> List[Header]:
        found = []
        for lineno, line in self._prose_lines():
            m = _HEADER_RE.match(line)
            if m:
                text = m.group(2)
                found.append(
                    Header(level=len(m.group(1)), text=text, anchor=slugify(text), line=lineno)
                )
        return found

    def sections(self, level: int = 2) -> List[Tuple[Header, List[CodeBlock]]]:
        """
        Headers of the given level with the code blocks under them, up to
        the next header of the same or a higher level.
        """
        headers = self.headers()
        found = []
        for i, header in enumerate(headers):
            if header.level != level:
                continue
            end = next(
                (h.line for h in headers[i + 1:] if h.level <= level),
                float("inf"),
            )
            blocks = [b for b in self.code_blocks if header.line < b.line < end]
            found.append((header, blocks))
        return found

    def anchors(self) -> List[str]:
        return [h.anchor for h in self.headers()]

    def links(self) -> List[Link]:
        found = []
        for lineno, line in self._prose_lines():
            for m in _LINK_RE.finditer(line):
                found.append(Link(text=m.group(1), target=m.group(2), line=lineno))
        return found

    def samples(self, language: str) -> List[CodeBlock]:
        return [b for b in self.code_blocks if b.language == language]

    def has_toc_placeholder(self) -> bool:
        return self._toc_position() is not None

    def _toc_position(self) -> Optional[int]:
        """Index (in body lines) of the list item preceding `{:toc}`."""
        lines = self.body.splitlines()
        for i in range(1, len(lines)):
            if lines[i].strip() == _TOC_MARKER and lines[i - 1].lstrip().startswith(("* ", "- ")):
                return i - 1
        return None

    def expand_toc(self) -> str:
        """
        Return the body with the TOC placeholder replaced by a nested
        list of links to every header. The body is returned unchanged if
        there is no placeholder.
        """
        pos = self._toc_position()
        if pos is None:
            return self.body

        headers = self.headers()
        top = min((h.level for h in headers), default=1)
        toc = [
            f"{'  ' * (h.level - top)}* [{h.text}](#{h.anchor})"
            for h in headers
        ]

        lines = self.body.splitlines()
        expanded = lines[:pos] + toc + lines[pos + 2:]
        return "\n".join(expanded) + ("\n" if self.body.endswith("\n") else "")


def _split_front_matter(text: str, path: str) -> Tuple[Dict[str, Any], str, int]:
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != "---":
        return {}, text, 0

    for end in range(1, len(lines)):
        if lines[end].strip() == "---":
            meta = yaml.safe_load("".join(lines[1:end])) or {}
            if not isinstance(meta, dict):
                raise ValueError(f"Front-matter must be a mapping: {path}")
            return meta, "".join(lines[end + 1:]), end + 1

    raise ValueError(f"Unterminated front-matter block in: {path}")


def _extract_code_blocks(body: str, offset: int, path: str) -> List[CodeBlock]:
    blocks = []
    current: Optional[List[str]] = None
    language = ""
    start = 0
    fence = ""

    for i, line in enumerate(body.splitlines()):
        m = _FENCE_RE.match(line.strip())
        if current is None:
            if m:
                fence = m.group(1)
                language = m.group(2).lower()
                current = []
                start = i + 2 + offset
        elif m and m.group(1) == fence and not m.group(2):
            blocks.append(CodeBlock(language=language, code="\n".join(current) + "\n", line=start))
            current = None
        else:
            current.append(line)

    if current is not None:
        raise ValueError(f"Unterminated code block starting at line {start - 1} in: {path}")
    return blocks


def parse_page(text: str, path: str = "<string>") -> GuidePage:
    """Parse guide page source text."""
    front_matter, body, offset = _split_front_matter(text, path)
    return GuidePage(
        path=path,
        front_matter=front_matter,
        body=body,
        body_offset=offset,
        code_blocks=_extract_code_blocks(body, offset, path),
    )


def load_page(path: str) -> GuidePage:
    """
    Read and parse a guide page.

    Raises
    ------
    FileNotFoundError
        If the page does not exist.
    ValueError
        If the front-matter or a code fence is malformed.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Guide page not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        text = f.read()

    return parse_page(text, path)
