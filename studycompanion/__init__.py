"""StudyCompanion engine.

Decision engine for a learning companion: student-state detection,
dynamic ordering of the Chat / Practice / Progress cards, and adaptive
practice difficulty with smoothed mastery tracking.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
