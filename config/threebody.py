"""Configuration for the three-body gravitational system."""

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "Three-Body Problem"
}

TRAILS = {
    "count": 1,                    # One system = three bodies = three trails
    "length": 1024,
}

PARAMS = {
    "G": 1.0,
    "masses": (1.0, 1.0, 1.0),
    "step_size": 0.008,
    "steps_per_frame": 6,
}

OSCILLATION = {
    "enabled": False,
    "G": {"base": 1.0, "amplitude": 0.1, "frequency": 0.003},
    "masses": {
        "base": (1.0, 1.0, 1.0),
        "amplitude": (0.2, 0.2, 0.2),
        "frequency": (0.002, 0.0024, 0.0016),
    },
}

DISPLAY = {
    "scale": 1.0,
    "rotation": (0.5, 0.3, 0.0),
    "rotation_speed": (0.0002, 0.0001, 0.0001),
    "translation": (0.0, 0.0, 2.5),
    "center_offset": 0.0,
}

COLORS = {
    "background": (0.05, 0.05, 0.1, 1.0),  # Darker background for space
    "text": (0.7, 0.8, 0.9),
    "distance_coloring": False,
    "distance_a": (0.702, 0.098, 0.671),
    "distance_b": (0.824, 0.412, 0.118),
    "centers": ((0.0, 0.0, 0.0),),
    "palette": (
        (0.702, 0.098, 0.671),     # Rosolanc purple
        (0.604, 0.710, 0.839),     # Light glaucous blue
        (0.824, 0.412, 0.118),     # Cinnamon rufous
    ),
}
