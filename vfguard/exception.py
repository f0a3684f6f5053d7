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

"""vfguard base exception handling.

Every rejection the admission engine can produce is a subclass of
:class:`VFGuardException`.  The ``code`` attribute tells the transport layer
whether the policy itself was refused (4xx) or whether the engine could not
evaluate it at all (5xx).
"""

from oslo_log import log as logging

from vfguard.i18n import _

LOG = logging.getLogger(__name__)


class VFGuardException(Exception):
    """Base vfguard Exception

    To correctly use this class, inherit from it and define
    a 'msg_fmt' property. That msg_fmt will get printf'd
    with the keyword arguments provided to the constructor.

    """
    msg_fmt = _("An unknown exception occurred.")
    code = 500

    def __init__(self, message=None, **kwargs):
        self.kwargs = kwargs

        if 'code' not in self.kwargs:
            try:
                self.kwargs['code'] = self.code
            except AttributeError:
                pass

        try:
            if not message:
                message = self.msg_fmt % kwargs
            else:
                message = str(message)
        except Exception:
            self._log_exception()
            message = self.msg_fmt

        self.message = message
        super(VFGuardException, self).__init__(message)

    def _log_exception(self):
        # kwargs doesn't match a variable in the message
        # log the issue and the kwargs
        LOG.exception('Exception in string format operation')
        for name, value in self.kwargs.items():
            LOG.error("%s: %s" % (name, value))  # noqa

    def format_message(self):
        return self.args[0]

    def __repr__(self):
        return str(dict(self.__dict__, **{'class': self.__class__.__name__}))


class Invalid(VFGuardException):
    msg_fmt = _("Bad Request - Invalid Parameters")
    code = 400


class MalformedInputError(Invalid):
    msg_fmt = _("Malformed policy: %(reason)s")


class InvalidResourceName(MalformedInputError):
    msg_fmt = _("resource name \"%(resource_name)s\" contains invalid "
                "characters, the accepted syntax of the regular expressions "
                "is: \"%(pattern)s\"")


class EmptyNicSelector(MalformedInputError):
    msg_fmt = _("at least one of these parameters (vendor, deviceID, "
                "pfNames, rootDevices or netFilter) has to be defined in "
                "nicSelector in CR %(policy)s")


class MalformedRangeError(MalformedInputError):
    msg_fmt = _("failed to parse %(pf_name)s PF name in nicSelector, "
                "%(reason)s")


class InvalidPfName(MalformedInputError):
    msg_fmt = _("invalid PF name: %(pf_name)s")


class UnsupportedDeviceError(Invalid):
    msg_fmt = _("Device is not supported: %(reason)s")


class UnsupportedVendor(UnsupportedDeviceError):
    msg_fmt = _("vendor %(vendor)s is not supported")


class UnsupportedModel(UnsupportedDeviceError):
    msg_fmt = _("vendor/device %(vendor)s/%(device_id)s is not supported")


class UnsupportedDevice(UnsupportedDeviceError):
    msg_fmt = _("device %(device_id)s is not supported")


class IncompatibleModeError(Invalid):
    msg_fmt = _("Incompatible device modes: %(reason)s")


class VfioRdmaConflict(IncompatibleModeError):
    msg_fmt = _("'deviceType: vfio-pci' conflicts with 'isRdma: true'; Set "
                "'deviceType' to (string)'netdevice' Or Set 'isRdma' to "
                "(bool)'false'")


class InfinibandRequiresRdma(IncompatibleModeError):
    msg_fmt = _("'linkType: ib or IB' requires 'isRdma: true'; Set 'isRdma' "
                "to (bool)'true'")


class VdpaRequiresNetdevice(IncompatibleModeError):
    msg_fmt = _("'deviceType: %(device_type)s' conflicts with 'vdpaType: "
                "virtio'; Set 'deviceType' to (string)'netdevice' Or Remove "
                "'vdpaType'")


class VdpaRequiresSwitchdev(IncompatibleModeError):
    msg_fmt = _("virtio/vdpa requires the device to be configured in "
                "switchdev mode")


class VdpaUnsupportedVendor(IncompatibleModeError):
    msg_fmt = _("vendor(%(vendor)s) in CR %(policy)s not supported for "
                "virtio-vdpa")


class CapacityExceededError(Invalid):
    msg_fmt = _("numVfs(%(num_vfs)d) in CR %(policy)s exceed the maximum "
                "allowed value(%(limit)d)")


class ZeroVfsNotAllowed(CapacityExceededError):
    msg_fmt = _("numVfs(%(num_vfs)d) in CR %(policy)s is not allowed")


class NumVfsExceedsLimit(CapacityExceededError):
    pass


class RangeOverlapError(Invalid):
    msg_fmt = _("VF index range in %(pf_name)s is overlapped with existing "
                "policy %(policy)s (%(other_pf_name)s)")


class NoMatchError(Invalid):
    msg_fmt = _("Policy %(policy)s selects nothing")


class NoMatchingNode(NoMatchError):
    msg_fmt = _("no matched node is selected by the nodeSelector in CR "
                "%(policy)s")


class NoSupportedNicSelected(NoMatchError):
    msg_fmt = _("no supported NIC is selected by the nicSelector in CR "
                "%(policy)s")


class DeletionForbidden(Invalid):
    msg_fmt = _("default %(kind)s shouldn't be deleted")


class InvalidOperatorConfig(Invalid):
    msg_fmt = _("only default SriovOperatorConfig is used")


class RetrievalError(VFGuardException):
    msg_fmt = _("Unable to retrieve %(resource)s: %(reason)s")
    code = 503


class InvalidRegistryEntry(VFGuardException):
    msg_fmt = _("Invalid supported model entry: %(reason)s")


class UnknownOperation(Invalid):
    msg_fmt = _("Unknown admission operation %(operation)s")


class InventoryDriverNotFound(VFGuardException):
    msg_fmt = _("Inventory driver %(driver)s could not be loaded: "
                "%(reason)s")
