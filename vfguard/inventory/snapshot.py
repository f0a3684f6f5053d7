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

"""Inventory driver reading the cluster state from a JSON snapshot file.

The file is read again on every query, so it can be replaced atomically
while the service runs::

    {
        "machines": [{"name": "worker-0",
                      "labels": {"feature.node.kubernetes.io/sriov": "true"},
                      "provider_id": ""}],
        "node_states": [{"name": "worker-0",
                         "interfaces": [{"name": "ens1f0",
                                         "vendor": "8086",
                                         "device_id": "158b",
                                         "pci_address": "0000:3b:00.0",
                                         "total_vfs": 64}]}],
        "policies": [{"name": "policy-a",
                      "namespace": "sriov-network-operator",
                      "resource_name": "intel_nics",
                      "num_vfs": 8,
                      "nic_selector": {"pf_names": ["ens1f0#0-3"]}}]
    }
"""

from oslo_log import log as logging
from oslo_serialization import jsonutils

import vfguard.conf
from vfguard import exception
from vfguard.i18n import _
from vfguard import inventory
from vfguard import objects
from vfguard import utils

CONF = vfguard.conf.CONF
LOG = logging.getLogger(__name__)


class SnapshotInventory(inventory.InventoryDriver):

    def __init__(self, path=None):
        self.path = path or CONF.admission.snapshot_path

    def _load(self, section):
        if not self.path:
            raise exception.RetrievalError(
                resource=section, reason=_("no snapshot path configured"))
        try:
            with open(self.path) as snapshot:
                data = jsonutils.load(snapshot)
        except (OSError, ValueError) as exc:
            raise exception.RetrievalError(resource=section, reason=exc)

        entries = data.get(section, []) if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise exception.RetrievalError(
                resource=section,
                reason=_("%(path)s has no list of %(section)s") %
                {'path': self.path, 'section': section})
        LOG.debug("Read %(count)d %(section)s from %(path)s",
                  {'count': len(entries), 'section': section,
                   'path': self.path})
        return entries

    def list_machines(self, label_selector=''):
        wanted = utils.parse_label_selector(label_selector)
        machines = [objects.MachineDescriptor.from_dict(entry)
                    for entry in self._load('machines')]
        return [machine for machine in machines
                if utils.labels_match(wanted, machine.labels)]

    def list_node_states(self, namespace):
        return [objects.NodeState.from_dict(entry)
                for entry in self._load('node_states')]

    def list_policies(self, namespace):
        policies = [objects.NodePolicy.from_dict(entry)
                    for entry in self._load('policies')]
        return [policy for policy in policies
                if policy.namespace == namespace]
