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

from oslo_log import log as logging

from vfguard import exception
from vfguard.pci import utils

LOG = logging.getLogger(__name__)


def ranges_overlap(start, end, other_start, other_end):
    """Return True if the inclusive ranges share at least one index."""
    return not (end < other_start or start > other_end)


def _parse_current(pf_name):
    try:
        return utils.parse_pf_name(pf_name)
    except exception.MalformedRangeError:
        raise exception.InvalidPfName(pf_name=pf_name)


def _parse_existing(pf_name, policy):
    # NOTE: tokens of an existing policy were validated when that policy was
    # admitted. Refusing the current policy because of them would block
    # every later change on the node, so a malformed token is skipped.
    try:
        return utils.parse_pf_name(pf_name)
    except exception.MalformedRangeError as exc:
        LOG.warning("Ignoring PF name %(pf_name)s of policy %(policy)s: "
                    "%(reason)s",
                    {'pf_name': pf_name, 'policy': policy.name,
                     'reason': exc.format_message()})
        return None


def check_policy_conflict(current, other):
    """Check that two policies do not claim the same VFs of an interface.

    Both policies are assumed to select at least one common machine.

    :param current: the NodePolicy being validated.
    :param other: a NodePolicy already present in the cluster.
    :raises: RangeOverlapError if a VF index is claimed by both policies,
             InvalidPfName if a PF name of the current policy is malformed.
    """
    LOG.debug("Validating policy %(current)s against policy %(other)s",
              {'current': current.name, 'other': other.name})

    if current.name == other.name:
        return

    other_specs = []
    for other_pf in other.nic_selector.pf_names:
        spec = _parse_existing(other_pf, other)
        if spec is not None:
            other_specs.append((other_pf, spec))

    for current_pf in current.nic_selector.pf_names:
        current_spec = _parse_current(current_pf)
        start, end = current_spec.bounds(current.num_vfs)
        for other_pf, other_spec in other_specs:
            if current_spec.name != other_spec.name:
                continue
            other_start, other_end = other_spec.bounds(other.num_vfs)
            if ranges_overlap(start, end, other_start, other_end):
                raise exception.RangeOverlapError(
                    pf_name=current_pf, other_pf_name=other_pf,
                    policy=other.name)
