"""Browser-based web UI for PyTerm.

This package provides a Flask application that exposes the shell and
its line editor through a web browser.  It is an **optional** extra —
install with::

    pip install py-term[web]

The ``create_app`` factory in ``app.py`` boots a machine and serves the
terminal page plus a small JSON API (see that module).
"""
