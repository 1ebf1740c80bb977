"""
OpenGL rendering for attractor trails.

Submodules are imported directly (``rendering.trail_renderer``,
``rendering.text``) so that ``rendering.glsl`` loads without PyOpenGL.
"""
