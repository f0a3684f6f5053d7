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


@base.VFGuardObjectRegistry.register
class MachineDescriptor(base.VFGuardEphemeralObject,
                        ovo_base.ComparableVersionedObject):
    # Version 1.0: Initial version
    VERSION = '1.0'

    fields = {
        'name': fields.StringField(),
        'labels': fields.DictOfStringsField(default={}),
        # Cloud provider identifier, e.g. "openstack:///<uuid>"; empty on
        # bare metal.
        'provider_id': fields.StringField(default=''),
    }


@base.VFGuardObjectRegistry.register
class InterfaceDescriptor(base.VFGuardEphemeralObject,
                          ovo_base.ComparableVersionedObject):
    """A physical function discovered on a machine."""

    # Version 1.0: Initial version
    VERSION = '1.0'

    fields = {
        'name': fields.StringField(),
        'vendor': fields.StringField(default=''),
        'device_id': fields.StringField(default=''),
        'pci_address': fields.StringField(default=''),
        'total_vfs': fields.NonNegativeIntegerField(default=0),
        'net_filter': fields.StringField(default=''),
    }


@base.VFGuardObjectRegistry.register
class NodeState(base.VFGuardEphemeralObject,
                ovo_base.ComparableVersionedObject):
    """Interface inventory reported for one machine.

    A node state shares its name with the machine it describes.
    """

    # Version 1.0: Initial version
    VERSION = '1.0'

    fields = {
        'name': fields.StringField(),
        'interfaces': fields.ListOfObjectsField('InterfaceDescriptor',
                                                default=[]),
    }

    @classmethod
    def from_dict(cls, data):
        kwargs = cls._known_fields(data)
        kwargs['interfaces'] = [
            InterfaceDescriptor.from_dict(iface)
            for iface in kwargs.get('interfaces', [])]
        return cls(**kwargs)
