"""Settings package for Homio.

`base.py` holds the configuration shared by every environment; `dev.py`,
`prod.py` and `test.py` layer environment specific overrides on top.
"""
