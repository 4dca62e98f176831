"""
Collection operations built on a single iteration primitive.

kernel.each() is the only traversal; reduce, transforms, merge, sorting and
shape are layered on top of it in that order.
"""
