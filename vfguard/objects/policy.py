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

from oslo_versionedobjects import base as ovo_base

from vfguard.objects import base
from vfguard.objects import fields
from vfguard import utils


@base.VFGuardObjectRegistry.register
class NicSelector(base.VFGuardEphemeralObject,
                  ovo_base.ComparableVersionedObject):
    """Physical functions a node policy claims on each selected machine."""

    # Version 1.0: Initial version
    VERSION = '1.0'

    fields = {
        'vendor': fields.StringField(default=''),
        'device_id': fields.StringField(default=''),
        'root_devices': fields.ListOfStringsField(default=[]),
        # Each entry is an interface name, optionally suffixed with a VF
        # index range: "ens1f0" or "ens1f0#2-5".
        'pf_names': fields.ListOfStringsField(default=[]),
        'net_filter': fields.StringField(default=''),
    }

    def is_empty(self):
        return not any([self.vendor, self.device_id, self.pf_names,
                        self.root_devices, self.net_filter])


@base.VFGuardObjectRegistry.register
class NodePolicy(base.VFGuardEphemeralObject,
                 ovo_base.ComparableVersionedObject):
    """A request to carve virtual functions out of matching NICs."""

    # Version 1.0: Initial version
    VERSION = '1.0'

    fields = {
        'name': fields.StringField(),
        'namespace': fields.StringField(default=''),
        'resource_name': fields.StringField(default=''),
        # Orders policies when device plugin config is rendered; admission
        # never reads it.
        'priority': fields.IntegerField(default=99),
        'node_selector': fields.DictOfStringsField(default={}),
        'nic_selector': fields.ObjectField('NicSelector'),
        'num_vfs': fields.NonNegativeIntegerField(default=0),
        'device_type': fields.DeviceTypeField(
            default=fields.DeviceType.NETDEVICE),
        'is_rdma': fields.BooleanField(default=False),
        'link_type': fields.LinkTypeField(nullable=True, default=None),
        'vdpa_type': fields.VdpaTypeField(nullable=True, default=None),
        'eswitch_mode': fields.EswitchModeField(nullable=True, default=None),
    }

    def __init__(self, *args, **kwargs):
        super(NodePolicy, self).__init__(*args, **kwargs)
        if not self.obj_attr_is_set('nic_selector'):
            self.nic_selector = NicSelector()

    @classmethod
    def from_dict(cls, data):
        kwargs = cls._known_fields(data)
        nic_selector = kwargs.get('nic_selector')
        if isinstance(nic_selector, dict):
            kwargs['nic_selector'] = NicSelector.from_dict(nic_selector)
        return cls(**kwargs)

    def selects(self, machine):
        """Return True if every node selector label is set on the machine."""
        return utils.labels_match(self.node_selector, machine.labels)
