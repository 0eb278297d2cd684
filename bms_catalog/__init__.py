"""
BMS Catalog - Chart metadata extraction.

Reads BMS-family rhythm-game charts (the ``.bms``/``.bme``/``.bml``/``.pms``
text dialects and the ``.bmson`` JSON format), produces a uniform metadata
record per chart, and infers the keymode and difficulty that the files often
leave unstated.
"""

__version__ = "1.0.0"
