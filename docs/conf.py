# Configuration file for the Sphinx documentation builder.
#
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import os
import sys

sys.path.insert(0, os.path.abspath(".."))

# -- Project information -----------------------------------------------------

project = "bmap"
copyright = "2024, bmap contributors"
author = "bmap contributors"
release = "0.1.0"

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
    "sphinx.ext.napoleon",
]

exclude_patterns = ["_build"]

# BMap, BMapConfig and the exceptions document their constructors in the
# class docstring.
autodoc_default_options = {
    "members": True,
    "member-order": "bysource",
    "show-inheritance": True,
}
autodoc_typehints = "description"
autoclass_content = "class"

# Docstrings are Google style only.
napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_use_admonition_for_examples = True

html_theme = "alabaster"
html_theme_options = {
    "description": "Observable ordered map for Python",
}

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
}
