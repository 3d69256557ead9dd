# -*- coding: utf-8 -*-
"""Typed result shapes."""
