"""CLI handler for the tokenize subcommand."""

from __future__ import annotations

from sutra_pipeline.phonology.features import profile_form
from sutra_pipeline.phonology.tokenizer import tokenize

from .common import emit, prepare


def run_tokenize(text: str, log_level: str | None) -> None:
    prepare(None, log_level)
    stream = tokenize(text)
    emit({**stream.to_dict(), "profile": profile_form(text).to_dict()})
