"""Generated-file extraction.

Turns an AI backend's raw text reply into a ``{relative path: content}``
mapping ready to be written into a scaffold.

Usage::

    from promptforge.extraction import extract_files

    files = extract_files(reply_text)
    if not files:
        ...  # report "could not parse generated output"
"""

from promptforge.extraction.extractor import (
    ExtractionGrammar,
    ExtractionResult,
    GeneratedFileSet,
    extract_files,
    parse_generated_output,
)

__all__ = [
    "extract_files",
    "parse_generated_output",
    "ExtractionResult",
    "ExtractionGrammar",
    "GeneratedFileSet",
]
