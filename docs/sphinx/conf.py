# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the contract-transcode documentation."""

project = "contract-transcode"
author = "Contract Transcode Contributors"
release = "0.1.0"

# API pages are generated from the Google-style docstrings.
extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]
autodoc_member_order = "bysource"

html_theme = "alabaster"
