# -*- coding: utf-8 -*-
"""Model provider lifecycle management for the gateway."""

__version__ = "0.1.0"
