# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/instancemap/instances/directive.py
from __future__ import annotations

from .errors import DirectiveError

USERNAME_KEY = "username"


def extract_username(value: str) -> str:
    """
    Return the username from data in the form username=<username>.
    """
    key, sep, username = value.partition("=")
    if not sep or key != USERNAME_KEY:
        raise DirectiveError("data has an incorrect format")
    return username.strip()
