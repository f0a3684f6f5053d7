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

"""Read-only lookup tables of supported NIC models and platforms."""

import typing as ty

from oslo_log import log as logging
from oslo_serialization import jsonutils

import vfguard.conf
from vfguard import exception
from vfguard.i18n import _
from vfguard.pci import utils

CONF = vfguard.conf.CONF
LOG = logging.getLogger(__name__)


class SupportedModel(ty.NamedTuple):
    vendor_id: str
    device_id: str
    vf_device_id: ty.Optional[str] = None
    name: str = ''


class DeviceRegistry(object):

    """Registry of the NIC models and platforms vfguard knows about.

    Physical functions qualify through their own (vendor, device) pair.
    Virtual functions handed to a virtual machine only qualify through the
    VF device ID of a supported model, and only on a recognized
    virtualization platform.
    """

    def __init__(self, models=(), platforms=()):
        self.models = tuple(models)
        # A blank platform name would be a substring of every provider ID.
        self.platforms = tuple(p.strip() for p in platforms if p.strip())
        self._pf_models = frozenset(
            (m.vendor_id, m.device_id) for m in self.models)
        self._vf_models = frozenset(
            (m.vendor_id, m.vf_device_id) for m in self.models
            if m.vf_device_id)
        self._vendors = frozenset(m.vendor_id for m in self.models)
        self._devices = frozenset(m.device_id for m in self.models)
        self._platform_keys = tuple(p.lower() for p in self.platforms)

    @staticmethod
    def _parse_models(entries):
        """Parse and validate the supported models from the config."""
        models = []
        for entry in entries:
            try:
                spec = jsonutils.loads(entry)
            except ValueError:
                raise exception.InvalidRegistryEntry(
                    reason=_("Invalid entry: '%s'") % entry)
            if not isinstance(spec, dict):
                raise exception.InvalidRegistryEntry(
                    reason=_("Invalid entry: '%s'; Expecting dict") % entry)

            vf_device_id = spec.get('vf_device_id') or None
            for key in ('vendor_id', 'device_id'):
                if not utils.is_valid_pci_id(spec.get(key)):
                    raise exception.InvalidRegistryEntry(
                        reason=_("Invalid %(key)s in entry: '%(entry)s'") %
                        {'key': key, 'entry': entry})
            if vf_device_id and not utils.is_valid_pci_id(vf_device_id):
                raise exception.InvalidRegistryEntry(
                    reason=_("Invalid vf_device_id in entry: '%s'") % entry)

            models.append(SupportedModel(
                vendor_id=spec['vendor_id'],
                device_id=spec['device_id'],
                vf_device_id=vf_device_id,
                name=spec.get('name', '')))
        return models

    @classmethod
    def from_config(cls, conf=None):
        conf = conf or CONF
        models = cls._parse_models(conf.devices.supported_models)
        LOG.debug("Loaded %(count)d supported NIC models for platforms "
                  "%(platforms)s",
                  {'count': len(models),
                   'platforms': conf.devices.virtualization_platforms})
        return cls(models, conf.devices.virtualization_platforms)

    def is_supported_vendor(self, vendor_id):
        return vendor_id in self._vendors

    def is_supported_device(self, device_id):
        return device_id in self._devices

    def is_supported_model(self, vendor_id, device_id):
        return (vendor_id, device_id) in self._pf_models

    def is_vf_supported_model(self, vendor_id, device_id):
        return (vendor_id, device_id) in self._vf_models

    def get_platform(self, provider_id):
        """Return the virtualization platform a machine runs on, if any."""
        provider_id = (provider_id or '').lower()
        for platform, key in zip(self.platforms, self._platform_keys):
            if key in provider_id:
                return platform
        return None
