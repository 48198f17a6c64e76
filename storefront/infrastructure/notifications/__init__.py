# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .email import LogResetCodeNotifier, SmtpResetCodeNotifier

__all__ = ["LogResetCodeNotifier", "SmtpResetCodeNotifier"]
