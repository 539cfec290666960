## scalar constants and angle helpers for yapBSP
## Copyright (c) 2026 yapBSP contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""scalar constants and helpers shared by the yapBSP spaces"""

import math
import sys

## default tolerance below which points are considered to lie on a
## hyperplane, used whenever a tolerance is not given explicitly
DEFAULT_TOLERANCE = 1.0e-10

pi2 = 2.0*math.pi

## smallest positive normal double
SAFE_MIN = sys.float_info.min


def normalize_angle(a, center):
    """return the angle equivalent to ``a`` modulo 2 pi that lies in
    ``[center - pi, center + pi)``; non-finite angles give NaN"""
    if not math.isfinite(a):
        return math.nan
    return a - pi2 * math.floor((a + math.pi - center) / pi2)


def check_tolerance(tolerance):
    """validate a user supplied tolerance, returning it as a float"""
    tolerance = float(tolerance)
    if math.isnan(tolerance) or tolerance < 0.0:
        raise ValueError('bad tolerance: {}'.format(tolerance))
    return tolerance
