"""
Editorial checks for the user guide page.

A documentation page has no runtime behavior of its own. What can go wrong
is editorial:

- front-matter missing the fields the site generator needs
- a missing or empty table of contents
- cross-reference links that do not resolve
- code samples that no longer compile or run against the library
- a section whose samples skip one of the language bindings.

Each check returns a `CheckResult`; `run_all_checks` runs them in order.
Sample failures are collected as messages so one broken sample does not
hide the others.
"""

from __future__ import annotations

import contextlib
import io
import os
import traceback
from dataclasses import dataclass, field
from typing import List, Sequence
from urllib.parse import urlparse

from mlfeatures.guide.page import GuidePage, load_page


REQUIRED_FRONT_MATTER = ("layout", "title")
SAMPLE_LANGUAGE = "python"
SAMPLE_BINDINGS = ("python", "scala", "java")


@dataclass
class CheckResult:
    name: str
    passed: bool
    messages: List[str] = field(default_factory=list)


def check_front_matter(
    page: GuidePage,
    required: Sequence[str] = REQUIRED_FRONT_MATTER,
) -> CheckResult:
    missing = [key for key in required if not page.front_matter.get(key)]
    messages = [f"Front-matter is missing '{key}'." for key in missing]
    return CheckResult("front_matter", not missing, messages)


def check_toc(page: GuidePage) -> CheckResult:
    messages = []
    if not page.has_toc_placeholder():
        messages.append("No table-of-contents placeholder ('* ...' followed by '{:toc}').")
    if not page.headers():
        messages.append("Page has no section headers to list in the table of contents.")
    return CheckResult("toc", not messages, messages)


def check_links(page: GuidePage) -> CheckResult:
    """
    In-page anchors must match a header; relative file links must exist
    relative to the page directory. External URLs and templated links
    (containing "{{") are not checked.
    """
    anchors = set(page.anchors())
    base_dir = os.path.dirname(os.path.abspath(page.path)) if os.path.exists(page.path) else os.getcwd()
    messages = []

    for link in page.links():
        target = link.target
        if "{{" in target or urlparse(target).scheme in ("http", "https", "mailto"):
            continue

        if target.startswith("#"):
            if target[1:] not in anchors:
                messages.append(f"Line {link.line}: anchor '{target}' does not match any header.")
            continue

        file_part = target.split("#", 1)[0]
        if file_part and not os.path.exists(os.path.join(base_dir, file_part)):
            messages.append(f"Line {link.line}: linked file '{file_part}' does not exist.")

    return CheckResult("links", not messages, messages)


def check_code_samples(
    page: GuidePage,
    execute: bool = False,
    language: str = SAMPLE_LANGUAGE,
) -> CheckResult:
    """
    Compile every sample in `language`; with `execute=True`, also run each
    one in a fresh namespace with its stdout captured.
    """
    blocks = page.samples(language)
    messages = []
    if not blocks:
        messages.append(f"Page has no '{language}' code samples.")

    for block in blocks:
        origin = f"{page.path}:{block.line}"
        try:
            compiled = compile(block.code, origin, "exec")
        except SyntaxError as exc:
            messages.append(f"Sample at line {block.line} does not compile: {exc}")
            continue

        if not execute:
            continue

        namespace = {"__name__": "__guide_sample__"}
        try:
            with contextlib.redirect_stdout(io.StringIO()):
                exec(compiled, namespace)
        except SystemExit as exc:
            messages.append(f"Sample at line {block.line} called exit({exc.code!r}).")
        except Exception as exc:
            last = traceback.format_exception_only(type(exc), exc)[-1].strip()
            messages.append(f"Sample at line {block.line} failed: {last}")

    return CheckResult("code_samples", not messages, messages)


def check_sample_bindings(
    page: GuidePage,
    languages: Sequence[str] = SAMPLE_BINDINGS,
) -> CheckResult:
    """
    Every second-level section that carries code samples must carry one
    in each of `languages`. Only the python samples are compiled and run.
    """
    messages = []
    for header, blocks in page.sections(level=2):
        if not blocks:
            continue
        present = {b.language for b in blocks}
        for language in languages:
            if language not in present:
                messages.append(
                    f"Line {header.line}: section '{header.text}' has no '{language}' sample."
                )
    return CheckResult("sample_bindings", not messages, messages)


def run_all_checks(path: str, execute: bool = False) -> List[CheckResult]:
    """
    Run every editorial check on the guide page at `path`.

    Parameters
    ----------
    path : str
        Path of the markdown page.
    execute : bool
        Also execute the Python samples, not only compile them.

    Returns
    -------
    List[CheckResult]
        One result per check.
    """
    page = load_page(path)
    return [
        check_front_matter(page),
        check_toc(page),
        check_links(page),
        check_code_samples(page, execute=execute),
        check_sample_bindings(page),
    ]
