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

from oslo_versionedobjects import fields


# Import fields from oslo.versionedobjects
BooleanField = fields.BooleanField
IntegerField = fields.IntegerField
NonNegativeIntegerField = fields.NonNegativeIntegerField
StringField = fields.StringField
DictOfStringsField = fields.DictOfStringsField
ListOfStringsField = fields.ListOfStringsField
ObjectField = fields.ObjectField
ListOfObjectsField = fields.ListOfObjectsField
BaseEnumField = fields.BaseEnumField
Enum = fields.Enum


class BaseVFGuardEnum(Enum):
    def __init__(self, **kwargs):
        super(BaseVFGuardEnum, self).__init__(valid_values=self.__class__.ALL)


class DeviceType(BaseVFGuardEnum):
    """Driver the virtual functions of a policy are bound to."""

    NETDEVICE = 'netdevice'
    VFIO_PCI = 'vfio-pci'

    ALL = (NETDEVICE, VFIO_PCI)


class LinkType(BaseVFGuardEnum):
    """Link layer of the physical function.

    Both spellings are accepted; comparisons against these constants must be
    case insensitive.
    """

    ETH = 'ETH'
    IB = 'IB'

    ALL = (ETH, ETH.lower(), IB, IB.lower())

    @staticmethod
    def is_infiniband(value):
        return bool(value) and value.upper() == LinkType.IB


class VdpaType(BaseVFGuardEnum):

    VIRTIO = 'virtio'

    ALL = (VIRTIO,)


class EswitchMode(BaseVFGuardEnum):

    LEGACY = 'legacy'
    SWITCHDEV = 'switchdev'

    ALL = (LEGACY, SWITCHDEV)


class Operation(BaseVFGuardEnum):
    """Admission operation a validation request was issued for."""

    CREATE = 'CREATE'
    UPDATE = 'UPDATE'
    DELETE = 'DELETE'

    ALL = (CREATE, UPDATE, DELETE)


class DeviceTypeField(BaseEnumField):
    AUTO_TYPE = DeviceType()


class LinkTypeField(BaseEnumField):
    AUTO_TYPE = LinkType()


class VdpaTypeField(BaseEnumField):
    AUTO_TYPE = VdpaType()


class EswitchModeField(BaseEnumField):
    AUTO_TYPE = EswitchMode()
