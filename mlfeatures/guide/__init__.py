"""
The feature user guide page and its editorial checks.

This subpackage provides:
- parsing of docs/ml-features.md (front-matter, headers, links, samples)
- expansion of the table-of-contents placeholder
- checks that the page is complete and its code samples run.
"""
