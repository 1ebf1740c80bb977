"""Configuration for the multi-particle Lorenz attractor."""

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "Lorenz Attractor"
}

# Trail storage
TRAILS = {
    "count": 12,                   # Trajectories seeded at startup
    "length": 512,                 # Points kept per trail (ring length)
}

# Physics parameters
PARAMS = {
    "sigma": 10.0,
    "beta": 8.0 / 3.0,
    "rho": 28.0,
    "step_size": 0.002,
    "steps_per_frame": 3,
}

# Sinusoidal drift of the constants: base + amplitude * sin(frequency * t_ms)
OSCILLATION = {
    "enabled": True,
    "sigma": {"base": 10.0, "amplitude": 2.0, "frequency": 0.001},
    "beta": {"base": 8.0 / 3.0, "amplitude": 0.5, "frequency": 0.0008},
    "rho": {"base": 28.0, "amplitude": 5.0, "frequency": 0.0012},
}

# Forwarded to the trail shader as uniforms
DISPLAY = {
    "scale": 1.0 / 25.0,
    "rotation": (1.65, 3.08, -0.93),
    "rotation_speed": (0.0001, 0.0001, 0.0001),
    "translation": (0.0, 0.075, 1.81),
    "center_offset": 28.0,         # Fixed display rho, does not oscillate
}

COLORS = {
    "background": (0.1, 0.1, 0.1, 1.0),
    "text": (0.9, 0.9, 0.9),
    "distance_coloring": False,
    "distance_a": (0.658, 0.376, 0.718),   # Rosolanc purple
    "distance_b": (0.110, 0.420, 0.627),   # Helvetia blue
    "centers": ((-8.0, -8.0, 27.0), (8.0, 8.0, 27.0)),  # Attractor lobes
    "palette": None,                # None = built-in palette
}
