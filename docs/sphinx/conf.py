# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the ArchSync API reference."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

project = "ArchSync"
author = "ArchSync Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]
napoleon_google_docstring = True
autodoc_member_order = "bysource"

html_theme = "alabaster"
