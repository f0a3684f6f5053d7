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

"""Consistency rules a node policy must satisfy on its own.

These rules do not look at cluster state. They run in a fixed order and the
first violated rule rejects the policy.
"""

import re

from oslo_log import log as logging

from vfguard import exception
from vfguard.objects import fields
from vfguard.pci import utils

LOG = logging.getLogger(__name__)

RESOURCE_NAME_PATTERN = "^[a-zA-Z0-9_]+$"
_RESOURCE_NAME_REGEX = re.compile(RESOURCE_NAME_PATTERN)


class StaticPolicyChecker(object):

    def __init__(self, registry, dev_mode=False):
        self.registry = registry
        self.dev_mode = dev_mode

    @property
    def rules(self):
        return (
            self._check_resource_name,
            self._check_nic_selector,
            self._check_supported_model,
            self._check_pf_ranges,
            self._check_rdma,
            self._check_link_type,
            self._check_vdpa,
        )

    def check(self, policy):
        """Raise the error of the first rule the policy violates."""
        for rule in self.rules:
            rule(policy)

    def _check_resource_name(self, policy):
        if not _RESOURCE_NAME_REGEX.fullmatch(policy.resource_name):
            raise exception.InvalidResourceName(
                resource_name=policy.resource_name,
                pattern=RESOURCE_NAME_PATTERN)

    def _check_nic_selector(self, policy):
        if policy.nic_selector.is_empty():
            raise exception.EmptyNicSelector(policy=policy.name)

    def _check_supported_model(self, policy):
        if self.dev_mode:
            LOG.info("dev mode enabled - Admitting not supported NICs")
            return

        vendor = policy.nic_selector.vendor
        device_id = policy.nic_selector.device_id
        if vendor:
            if not self.registry.is_supported_vendor(vendor):
                raise exception.UnsupportedVendor(vendor=vendor)
            if (device_id and
                    not self.registry.is_supported_model(vendor, device_id)):
                raise exception.UnsupportedModel(vendor=vendor,
                                                 device_id=device_id)
        elif device_id:
            if not self.registry.is_supported_device(device_id):
                raise exception.UnsupportedDevice(device_id=device_id)

    def _check_pf_ranges(self, policy):
        for pf_name in policy.nic_selector.pf_names:
            if utils.PF_RANGE_SEPARATOR in pf_name:
                utils.parse_pf_name(pf_name, policy.num_vfs)

    def _check_rdma(self, policy):
        # RoCE is configured with netdevice + RDMA on bare metal, and with
        # vfio-pci without RDMA when the VF is handed to a virtual machine.
        if (policy.device_type == fields.DeviceType.VFIO_PCI and
                policy.is_rdma):
            raise exception.VfioRdmaConflict()

    def _check_link_type(self, policy):
        if fields.LinkType.is_infiniband(policy.link_type) and \
                not policy.is_rdma:
            raise exception.InfinibandRequiresRdma()

    def _check_vdpa(self, policy):
        if policy.vdpa_type != fields.VdpaType.VIRTIO:
            return
        if policy.device_type != fields.DeviceType.NETDEVICE:
            raise exception.VdpaRequiresNetdevice(
                device_type=policy.device_type)
        if policy.eswitch_mode != fields.EswitchMode.SWITCHDEV:
            raise exception.VdpaRequiresSwitchdev()
