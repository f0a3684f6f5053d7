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

"""An in-memory inventory driver.

Used by the tests, and by hosts that already hold the cluster snapshots and
only need the admission engine to read them.
"""

from vfguard import inventory
from vfguard import utils


class FakeInventory(inventory.InventoryDriver):

    def __init__(self, machines=None, node_states=None, policies=None):
        self.machines = list(machines or [])
        self.node_states = list(node_states or [])
        self.policies = list(policies or [])

    def list_machines(self, label_selector=''):
        wanted = utils.parse_label_selector(label_selector)
        return [machine for machine in self.machines
                if utils.labels_match(wanted, machine.labels)]

    def list_node_states(self, namespace):
        return list(self.node_states)

    def list_policies(self, namespace):
        return [policy for policy in self.policies
                if policy.namespace == namespace]
