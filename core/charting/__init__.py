"""Chart geometry: ticks, pixel mapping, bar layouts, pie angles and labels.

Every module except `builder` and `defaults` is pure and Django-free. The
builder composes them into one geometry per render pass for the drawing
backend.
"""
