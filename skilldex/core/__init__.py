# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Core components of Skilldex.

- exceptions: Error hierarchy shared by every component
- skills: Catalog loading, lookup and matching
- evolution: Maturity classification and progression history
- context: Explicit container wiring the components together
"""
