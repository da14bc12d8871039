import sys
import os

# to allow autodoc to discover the documented modules
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

project = 'Tideman'
author = 'Tideman contributors'

with open(os.path.join(os.path.dirname(__file__), '..', 'VERSION')) as f:
    release = f.read().strip()

extensions = [
    'sphinx.ext.autodoc',
]

templates_path = ['_templates']

exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

html_theme = 'sphinxdoc'

autodoc_member_order = 'bysource'
