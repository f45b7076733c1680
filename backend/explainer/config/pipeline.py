"""
Pipeline Configuration

Centralized constants for planning, synthesis, rendering and muxing.
"""

import os

# =============================================================================
# PLANNING
# =============================================================================

# Segment count the prompt asks for; plans outside the range are logged, not rejected
MIN_SEGMENTS = 5
MAX_SEGMENTS = 7

# Storyboard step durations (seconds)
DEFAULT_SEGMENT_DURATION = 6.0
MIN_SEGMENT_DURATION = 4.0

# =============================================================================
# AUDIO
# =============================================================================

# ~150 words per minute
SILENT_WORDS_PER_SECOND = 2.5
MIN_AUDIO_DURATION = 3.0

AUDIO_CODEC = "aac"
AUDIO_BITRATE = "192k"

# =============================================================================
# RENDERING
# =============================================================================

SCENE_CLASS_NAME = "MathScene"
SCENE_SCRIPT_NAME = "scene.py"

# Low quality (480p15) favours speed
RENDER_QUALITY_FLAG = "-ql"

RENDER_TIMEOUT = float(os.getenv("RENDER_TIMEOUT_SECONDS", "180"))

VIDEO_EXTENSION = ".mp4"

# =============================================================================
# DELIVERY
# =============================================================================

DELIVERY_FILENAME = "explanation.mp4"
DELIVERY_CHUNK_SIZE = 64 * 1024
