"""Sphinx configuration for consecvecmap documentation."""

from importlib.metadata import version as get_version

# -- Project information -----------------------------------------------------
project = 'consecvecmap'
copyright = '2026, consecvecmap contributors'
author = 'consecvecmap contributors'
release = get_version('consecvecmap')
version = '.'.join(release.split('.')[:2])

# -- General configuration ---------------------------------------------------
extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
]

exclude_patterns = ['_build']

# Docstrings use Google style only
napoleon_google_docstring = True
napoleon_numpy_docstring = False

# -- Options for HTML output -------------------------------------------------
html_theme = 'sphinx_rtd_theme'
html_title = f'consecvecmap {release}'

# -- Intersphinx configuration -----------------------------------------------
intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
}

# -- Autodoc configuration ---------------------------------------------------
autodoc_typehints = 'description'
autodoc_member_order = 'bysource'
autodoc_default_options = {
    'members': True,
    # Mapping dunders carry the KeyError/TypeError contract of the map
    'special-members': '__init__, __getitem__, __setitem__, __delitem__, __eq__',
    'show-inheritance': True,
}
