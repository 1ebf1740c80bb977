"""
GLSL sources for the trail program.

The vertex stage projects ring points with the engine's display uniforms and
forwards each vertex's age (read from the index attribute, 0 = newest) for
fading. The fragment stage discards everything older than the slot's oldest
valid point, including the interpolated span of the segment that joins it to
an unwritten ring position.
"""

PROJECT_VERT = """
#version 120
uniform float aspect;
uniform float scale;
uniform vec3 rotation;
uniform vec3 translation;
uniform float center_offset;

vec4 project(vec3 p) {
    p.z -= center_offset;
    float cx = cos(rotation.x), sx = sin(rotation.x);
    float cy = cos(rotation.y), sy = sin(rotation.y);
    float cz = cos(rotation.z), sz = sin(rotation.z);
    mat3 rx = mat3(1.0, 0.0, 0.0,  0.0, cx, sx,  0.0, -sx, cx);
    mat3 ry = mat3(cy, 0.0, -sy,  0.0, 1.0, 0.0,  sy, 0.0, cy);
    mat3 rz = mat3(cz, sz, 0.0,  -sz, cz, 0.0,  0.0, 0.0, 1.0);
    vec3 q = rz * ry * rx * (p * scale) + translation;
    return vec4(q.x / aspect, q.y, 0.0, q.z);
}
"""

TAIL_VERT = """
attribute vec3 point;
attribute float index;
uniform float max_length;
varying float v_age;
varying float v_alpha;

void main() {
    gl_Position = project(point);
    v_age = index;
    v_alpha = 1.0 - index / max_length;
}
"""

TAIL_FRAG = """
#version 120
uniform vec3 color;
uniform float tail_length;
varying float v_age;
varying float v_alpha;

void main() {
    // Segments past the oldest valid point interpolate into unwritten positions
    if (v_age > tail_length - 1.0) {
        discard;
    }
    gl_FragColor = vec4(color, v_alpha);
}
"""

VERTEX_SOURCE = PROJECT_VERT + TAIL_VERT
FRAGMENT_SOURCE = TAIL_FRAG
