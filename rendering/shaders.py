"""Shader compile/link boundary for the trail program."""

from dataclasses import dataclass, field
from typing import Dict

from OpenGL.GL import *
from OpenGL.GL import shaders

from attractors.errors import ShaderBuildError


@dataclass
class ShaderProgram:
    """Linked program plus active attribute/uniform locations by name."""
    program: int
    attrib: Dict[str, int] = field(default_factory=dict)
    uniform: Dict[str, int] = field(default_factory=dict)


def _decode(text) -> str:
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return str(text)


def _compile_stage(source: str, stage, label: str):
    try:
        return shaders.compileShader(source, stage)
    except RuntimeError as e:
        # ShaderCompilationError carries the info log in its message
        raise ShaderBuildError(f"{label} shader compilation", _decode(e.args[0])) from e


def compile_program(vertex_source: str, fragment_source: str) -> ShaderProgram:
    """
    Compile and link a program and collect its active locations.

    Raises:
        ShaderBuildError: with the driver's info log on compile or link failure
    """
    vertex = _compile_stage(vertex_source, GL_VERTEX_SHADER, "Vertex")
    fragment = _compile_stage(fragment_source, GL_FRAGMENT_SHADER, "Fragment")

    program = glCreateProgram()
    glAttachShader(program, vertex)
    glAttachShader(program, fragment)
    glLinkProgram(program)
    glDeleteShader(vertex)
    glDeleteShader(fragment)

    if glGetProgramiv(program, GL_LINK_STATUS) != GL_TRUE:
        log = _decode(glGetProgramInfoLog(program))
        glDeleteProgram(program)
        raise ShaderBuildError("Program linking", log)

    result = ShaderProgram(program=program)

    for i in range(glGetProgramiv(program, GL_ACTIVE_ATTRIBUTES)):
        name, _, _ = glGetActiveAttrib(program, i)
        name = _decode(name)
        result.attrib[name] = glGetAttribLocation(program, name)

    for i in range(glGetProgramiv(program, GL_ACTIVE_UNIFORMS)):
        name, _, _ = glGetActiveUniform(program, i)
        name = _decode(name)
        location = glGetUniformLocation(program, name)
        if location >= 0:
            result.uniform[name] = location

    return result
