"""Root conftest — shared test configuration."""

import os

# Deterministic settings for code paths that read the environment
os.environ.setdefault("PREDICATE_CORE_LOG_LEVEL", "DEBUG")
os.environ.setdefault("PREDICATE_CORE_LOG_REJECTIONS", "true")
