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

from vfguard.pci import utils

LOG = logging.getLogger(__name__)


class NicSelectorSpec(object):
    """Matches the nicSelector of a node policy against discovered NICs.

    Every field set on the selector must match. On top of that, only NICs of
    a supported model are ever selected::

        | nicSelector:
        |   vendor: "8086"
        |   deviceID: "158b"
        |   pfNames: ["ens1f0#0-7", "ens1f1"]
        |   rootDevices: ["0000:3b:00.0"]
        |   netFilter: "openstack/NetworkID:<uuid>"
    """

    def __init__(self, nic_selector, registry):
        self.vendor = nic_selector.vendor
        self.device_id = nic_selector.device_id
        self.net_filter = nic_selector.net_filter
        self.root_devices = frozenset(
            utils.normalize_pci_address(addr)
            for addr in nic_selector.root_devices)
        self.pf_names = frozenset(
            utils.get_pf_base_name(pf) for pf in nic_selector.pf_names)
        self.registry = registry

    def _match_selector(self, iface):
        conditions = [
            not self.vendor or self.vendor == iface.vendor,
            not self.device_id or self.device_id == iface.device_id,
            (not self.root_devices or
             utils.normalize_pci_address(iface.pci_address) in
             self.root_devices),
            not self.pf_names or iface.name in self.pf_names,
        ]
        return all(conditions)

    def _model_supported(self, iface, machine):
        if self.registry.is_supported_model(iface.vendor, iface.device_id):
            return True

        # On a virtualization platform the NIC seen by the machine is itself
        # a VF; it is identified through the network filter.
        platform = self.registry.get_platform(machine.provider_id)
        if (platform is not None and self.net_filter and
                self.net_filter == iface.net_filter and
                self.registry.is_vf_supported_model(iface.vendor,
                                                    iface.device_id)):
            return True

        LOG.debug("Interface %(iface)s on %(machine)s is not a supported "
                  "model (%(vendor)s/%(device)s)",
                  {'iface': iface.name, 'machine': machine.name,
                   'vendor': iface.vendor, 'device': iface.device_id})
        return False

    def match(self, iface, machine):
        """Return True if the policy claims this interface of the machine.

        :param iface: an InterfaceDescriptor reported for the machine.
        :param machine: the MachineDescriptor the interface belongs to.
        """
        return (self._match_selector(iface) and
                self._model_supported(iface, machine))
