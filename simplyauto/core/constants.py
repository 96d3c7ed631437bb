"""Centralised tunables and magic numbers.

All numeric constants that control runtime behaviour are collected here
so they are easy to find, document, and adjust.
"""

# ---------------------------------------------------------------------------
# AutoClicker  (simplyauto/core/autoclicker.py, config.py)
# ---------------------------------------------------------------------------
MIN_INTERVAL_MS     = 1      # floor for the configured interval and jittered delay
DEFAULT_INTERVAL_MS = 100    # AutoClickerConfig() default

# ---------------------------------------------------------------------------
# Player  (simplyauto/core/player.py)
# ---------------------------------------------------------------------------
DEFAULT_SPEED = 1.0          # substituted for non-positive playback speeds
SPEED_CHOICES = (0.5, 1.0, 2.0, 4.0)

# ---------------------------------------------------------------------------
# Coordinator  (simplyauto/core/app.py, notifier.py)
# ---------------------------------------------------------------------------
NOTIFY_CAPACITY = 32         # StateNotifier buffer size (drop-oldest when full)

# ---------------------------------------------------------------------------
# Capture  (simplyauto/core/capture.py)
# ---------------------------------------------------------------------------
LISTENER_JOIN_S = 1.0        # max wait for a pynput listener thread to exit

# ---------------------------------------------------------------------------
# Storage  (simplyauto/core/recording.py, storage.py)
# ---------------------------------------------------------------------------
RECORDING_VERSION = "1.0"
FILE_EXTENSION    = ".simplyauto"
APP_VERSION       = "0.1.0"
ERROR_LOG_NAME    = "simplyauto_errors.log"   # created beside the settings file
