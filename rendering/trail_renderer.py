"""
GPU side of the trail engine.

Owns three buffers:
- trail: flat (capacity, L, 3) float32 mirror of ``TrailStore.trail``
- index: per-vertex age as float, ``(2L - i - 1) % L`` for i in [0, 2L)
- element: the same sequence as uint32, drawn as one line strip per slot

Only the ring positions named by each FrameUpdate are sent; a full upload
happens on reallocation or when a frame overwrote the whole ring.
"""

import ctypes

import numpy as np
from OpenGL.GL import *
from pygame.locals import OPENGL

from attractors.errors import ContextUnavailableError
from attractors.trails import build_index_arrays, element_offset

from .glsl import FRAGMENT_SOURCE, VERTEX_SOURCE
from .shaders import compile_program


FLOAT_BYTES = 4
POINT_BYTES = 3 * FLOAT_BYTES


class TrailRenderer:
    """
    Draws every trail slot as a fading line strip.

    Args:
        surface: pygame display surface opened with the OPENGL flag
        background: RGBA clear color

    Raises:
        ContextUnavailableError: surface has no OpenGL context
        ShaderBuildError: trail program failed to compile or link
    """

    def __init__(self, surface, background=(0.1, 0.1, 0.1, 1.0)):
        if surface is None or not surface.get_flags() & OPENGL:
            raise ContextUnavailableError(
                "Display surface has no OpenGL context (open it with DOUBLEBUF | OPENGL)"
            )

        self.shader = compile_program(VERTEX_SOURCE, FRAGMENT_SOURCE)
        self._trail_buffer, self._index_buffer, self._element_buffer = glGenBuffers(3)
        self._length = 0
        self._colors = np.zeros((0, 3), dtype=np.float32)

        glClearColor(*background)
        glDisable(GL_DEPTH_TEST)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)

        print(f"[Render] Trail program ready: attributes {sorted(self.shader.attrib)}, "
              f"{len(self.shader.uniform)} uniforms")

    def _build_index_buffers(self, length: int):
        ages, elements = build_index_arrays(length)

        glBindBuffer(GL_ARRAY_BUFFER, self._index_buffer)
        glBufferData(GL_ARRAY_BUFFER, ages.nbytes, ages, GL_STATIC_DRAW)
        glBindBuffer(GL_ARRAY_BUFFER, 0)

        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, self._element_buffer)
        glBufferData(GL_ELEMENT_ARRAY_BUFFER, elements.nbytes, elements, GL_STATIC_DRAW)
        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, 0)

        self._length = length
        print(f"[Render] Index arrays rebuilt for ring length {length}")

    def upload(self, engine, update):
        """Apply one FrameUpdate to the GPU buffers."""
        trails = engine.trails

        glBindBuffer(GL_ARRAY_BUFFER, self._trail_buffer)
        if update.reallocated:
            if trails.trail.nbytes:
                glBufferData(GL_ARRAY_BUFFER, trails.trail.nbytes, trails.trail, GL_DYNAMIC_DRAW)
            else:
                glBufferData(GL_ARRAY_BUFFER, 0, None, GL_DYNAMIC_DRAW)
        elif update.full_upload:
            used = trails.trail[:trails.count]
            if used.nbytes:
                glBufferSubData(GL_ARRAY_BUFFER, 0, used.nbytes, used)
        else:
            for offset, data in trails.byte_ranges(update.dirty):
                glBufferSubData(GL_ARRAY_BUFFER, offset, data.nbytes, data)
        glBindBuffer(GL_ARRAY_BUFFER, 0)

        if trails.length != self._length:
            self._build_index_buffers(trails.length)

        if update.colors_dirty or len(self._colors) != trails.count:
            self._colors = engine.colors.colors[:trails.count].copy()

    def _set_uniforms(self, engine, aspect: float):
        uniform = self.shader.uniform
        display = engine.display

        if "aspect" in uniform:
            glUniform1f(uniform["aspect"], aspect)
        if "scale" in uniform:
            glUniform1f(uniform["scale"], display.scale)
        if "rotation" in uniform:
            glUniform3f(uniform["rotation"], *display.rotation)
        if "translation" in uniform:
            glUniform3f(uniform["translation"], *display.translation)
        if "center_offset" in uniform:
            glUniform1f(uniform["center_offset"], display.center_offset)
        if "max_length" in uniform:
            glUniform1f(uniform["max_length"], float(engine.trails.length))

    def draw(self, engine, aspect: float):
        """Clear and draw every slot in use, newest point first."""
        glClear(GL_COLOR_BUFFER_BIT)

        trails = engine.trails
        count = min(trails.count, len(self._colors))
        if count == 0 or self._length == 0:
            return

        length = trails.length
        first = element_offset(trails.cursor, length) * FLOAT_BYTES
        attrib = self.shader.attrib
        uniform = self.shader.uniform
        point_loc = attrib["point"]
        index_loc = attrib["index"]

        glUseProgram(self.shader.program)
        self._set_uniforms(engine, aspect)

        glBindBuffer(GL_ARRAY_BUFFER, self._index_buffer)
        glEnableVertexAttribArray(index_loc)
        glVertexAttribPointer(index_loc, 1, GL_FLOAT, GL_FALSE, 0, ctypes.c_void_p(first))

        glBindBuffer(GL_ARRAY_BUFFER, self._trail_buffer)
        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, self._element_buffer)
        glEnableVertexAttribArray(point_loc)

        for slot in range(count):
            glUniform3f(uniform["color"], *self._colors[slot])
            glUniform1f(uniform["tail_length"], float(trails.populated[slot]))
            glVertexAttribPointer(point_loc, 3, GL_FLOAT, GL_FALSE, 0,
                                  ctypes.c_void_p(slot * length * POINT_BYTES))
            glDrawElements(GL_LINE_STRIP, length, GL_UNSIGNED_INT, ctypes.c_void_p(first))

        glDisableVertexAttribArray(point_loc)
        glDisableVertexAttribArray(index_loc)
        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, 0)
        glBindBuffer(GL_ARRAY_BUFFER, 0)
        glUseProgram(0)

    def release(self):
        glDeleteBuffers(3, [self._trail_buffer, self._index_buffer, self._element_buffer])
        glDeleteProgram(self.shader.program)
