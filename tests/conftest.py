"""Pytest configuration and shared fixtures."""

import os

from hypothesis import settings

# Must be set before `sparse_merkle` is first imported.
if "SMT_ENV" not in os.environ:
    os.environ["SMT_ENV"] = "test"

# Tree builds hash once per level, so example run times vary with the drawn depth.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")
