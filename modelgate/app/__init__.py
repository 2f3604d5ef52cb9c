# -*- coding: utf-8 -*-
from ._app import create_app

__all__ = ["create_app"]
