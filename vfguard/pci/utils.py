#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.

import re
import typing as ty

from oslo_log import log as logging

from vfguard import exception
from vfguard.i18n import _

LOG = logging.getLogger(__name__)

PCI_VENDOR_PATTERN = "^(hex{4})$".replace("hex", r"[\da-fA-F]")
_PCI_VENDOR_REGEX = re.compile(PCI_VENDOR_PATTERN)
_PCI_ADDRESS_PATTERN = ("^(hex{4}):(hex{2}):(hex{2}).(oct{1})$".
                                             replace("hex", r"[\da-fA-F]").
                                             replace("oct", "[0-7]"))
_PCI_ADDRESS_REGEX = re.compile(_PCI_ADDRESS_PATTERN)
_VF_INDEX_REGEX = re.compile(r"[0-9]+")

PF_RANGE_SEPARATOR = '#'
VF_RANGE_SEPARATOR = '-'


class RangeSpec(ty.NamedTuple):
    """A PF name token split into its interface name and VF index range.

    ``start`` and ``end`` are both None when the token carries no range, in
    which case the token claims every VF of the owning policy.
    """

    name: str
    start: ty.Optional[int] = None
    end: ty.Optional[int] = None

    @property
    def has_range(self) -> bool:
        return self.start is not None

    def bounds(self, num_vfs: int) -> ty.Tuple[int, int]:
        """Return the inclusive VF index range claimed by this token."""
        if self.has_range:
            return self.start, self.end
        # NOTE: a bare token claims at least index 0, so that two whole
        # interface claims collide even when a policy asks for no VFs.
        return 0, max(num_vfs - 1, 0)


def get_pf_base_name(pf_name: str) -> str:
    """Return the interface name of a PF name token, without its range."""
    return pf_name.split(PF_RANGE_SEPARATOR)[0]


def _parse_vf_index(value: str) -> ty.Optional[int]:
    if not _VF_INDEX_REGEX.fullmatch(value):
        return None
    return int(value)


def parse_pf_name(
    pf_name: str, num_vfs: ty.Optional[int] = None,
) -> RangeSpec:
    """Parse a ``name`` or ``name#start-end`` PF name token.

    :param pf_name: the token as written in the nicSelector.
    :param num_vfs: VF count of the policy owning the token. When given, the
                    end of the range must be a valid VF index for it.
    :raises: MalformedRangeError if the token cannot be parsed.
    """
    if PF_RANGE_SEPARATOR not in pf_name:
        return RangeSpec(pf_name)

    fields = pf_name.split(PF_RANGE_SEPARATOR)
    if len(fields) != 2:
        raise exception.MalformedRangeError(
            pf_name=pf_name,
            reason=_("probably incorrect separator character usage"))

    name, vf_range = fields
    bounds = vf_range.split(VF_RANGE_SEPARATOR)
    if len(bounds) != 2:
        raise exception.MalformedRangeError(
            pf_name=pf_name,
            reason=_("probably incorrect range character usage"))

    start = _parse_vf_index(bounds[0])
    if start is None:
        raise exception.MalformedRangeError(
            pf_name=pf_name, reason=_("start range is incorrect"))
    end = _parse_vf_index(bounds[1])
    if end is None:
        raise exception.MalformedRangeError(
            pf_name=pf_name, reason=_("end range is incorrect"))

    if end < start:
        raise exception.MalformedRangeError(
            pf_name=pf_name,
            reason=_("end range shall not be smaller than start range"))
    if num_vfs is not None and not end < num_vfs:
        raise exception.MalformedRangeError(
            pf_name=pf_name,
            reason=_("end range exceeds the maximum VF index %d") %
            (num_vfs - 1))

    return RangeSpec(name, start, end)


def is_valid_pci_id(value: str) -> bool:
    """Return True for a four digit hexadecimal vendor or device ID."""
    return bool(_PCI_VENDOR_REGEX.match(value or ''))


def normalize_pci_address(address: str) -> str:
    """Lower-case a ``dddd:bb:ss.f`` address; leave anything else as is."""
    if _PCI_ADDRESS_REGEX.match(address or ''):
        return address.lower()
    return address
