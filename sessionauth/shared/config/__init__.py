# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import AppConfig, AuthConfig, SecurityConfig, load_config

__all__ = ["AppConfig", "AuthConfig", "SecurityConfig", "load_config"]
