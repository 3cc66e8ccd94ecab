# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Core engine packages: configuration, card ordering, practice adaptation
and engagement tracking."""
