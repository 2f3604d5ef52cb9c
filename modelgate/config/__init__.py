# -*- coding: utf-8 -*-
"""Configuration document: patches, read helpers and the JSON store."""
