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

"""vfguard common internal object model"""

from oslo_utils import versionutils
from oslo_versionedobjects import base as ovoo_base

from vfguard import objects


class VFGuardObjectRegistry(ovoo_base.VersionedObjectRegistry):

    def registration_hook(self, cls, index):
        # NOTE: This is called when an object is registered, and is
        # responsible for maintaining vfguard.objects.$OBJECT as the
        # highest-versioned implementation of a given object.
        version = versionutils.convert_version_to_tuple(cls.VERSION)
        if not hasattr(objects, cls.obj_name()):
            setattr(objects, cls.obj_name(), cls)
        else:
            cur_version = versionutils.convert_version_to_tuple(
                getattr(objects, cls.obj_name()).VERSION)
            if version >= cur_version:
                setattr(objects, cls.obj_name(), cls)


class VFGuardObject(ovoo_base.VersionedObject):
    """Base class for every record the admission engine reads or produces.

    None of these objects is ever persisted by vfguard; they are snapshots
    handed over by the inventory driver, or verdicts handed back to the
    caller.
    """

    OBJ_SERIAL_NAMESPACE = 'vfguard_object'
    OBJ_PROJECT_NAMESPACE = 'vfguard'

    @classmethod
    def _known_fields(cls, data):
        return {key: value for key, value in data.items()
                if key in cls.fields}

    @classmethod
    def from_dict(cls, data):
        """Build an object from a plain mapping, ignoring unknown keys."""
        return cls(**cls._known_fields(data))


class EphemeralObject(object):
    """Mix-in to provide more recognizable field defaulting.

    Objects inheriting from this class have all fields with a default= set
    to those values during instantiation.
    """

    def __init__(self, *args, **kwargs):
        super(EphemeralObject, self).__init__(*args, **kwargs)
        # Not specifying any fields causes all defaulted fields to be set
        self.obj_set_defaults()


class VFGuardEphemeralObject(EphemeralObject, VFGuardObject):
    """Base class for objects that only live for one validation."""
    pass
