# -*- coding: utf-8 -*-

# Tether
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Adapters: terminal units that dispatch a request over a transport."""

from tether.adapters.httpx_adapter import HttpxAdapter

__all__ = ["HttpxAdapter"]
