"""
entrypack - Convert a JMdict XML dump into an entity registry and an entrypack.

Modules:
    line_reader: Buffered line-wise reading of the (optionally compressed) dump
    preamble: Entity set extraction from the DTD preamble
    registry: Entity registry output and loading
    segmenter: Splitting the document body into <entry> fragments
    transcode: XML fragment -> Entry -> compact JSON line
    model: Entry dataclasses and their compact JSON form
    reader: Reading entrypack files back into Entry records
    pipeline: One complete conversion run
"""

__version__ = "0.1.0"
