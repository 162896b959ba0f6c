project = "refinedfloats"
copyright = "2026, refinedfloats contributors"
author = "refinedfloats contributors"
release = "0.1.0-alpha"
version = "0.1"
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
]
exclude_patterns = ["_build"]
html_theme = "sphinx_rtd_theme"
html_title = "refinedfloats Documentation"
autodoc_default_options = {
    "members": True,
    "member-order": "bysource",
    "show-inheritance": True,
}
autodoc_typehints = "description"
napoleon_google_docstring = True
napoleon_numpy_docstring = False
intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "z3": ("https://z3prover.github.io/api/html/", None),
}
autosummary_generate = True
