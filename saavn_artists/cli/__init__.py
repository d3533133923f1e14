"""Command-line tools for saavn-artists.

- ``python -m saavn_artists.cli.search`` - run one artist search against
  the live provider and print a table or the JSON envelope.
"""
