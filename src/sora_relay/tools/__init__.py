# SPDX-License-Identifier: MIT
"""Handlers for the Sora video tools.

- video: job creation, status, download instructions, listing, deletion, remix
- reference: reference image inputs for image-guided creation

Handlers return plain payloads; rendering and error conversion happen in the
dispatcher.
"""
