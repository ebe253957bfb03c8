from __future__ import annotations

from .mailer import Credentials, Mailer, build_message
from .render import render_html, render_text, subject_for

__all__ = [
    "Credentials",
    "Mailer",
    "build_message",
    "render_html",
    "render_text",
    "subject_for",
]
