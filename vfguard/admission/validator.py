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

"""Admission validation of SR-IOV node policies.

A :class:`PolicyValidator` answers one question per call: may this policy
(or operator configuration) be created, updated or deleted? It reads the
cluster through an inventory driver and never changes anything; every call
works on its own state so concurrent validations cannot interfere.
"""

from oslo_log import log as logging

import vfguard.conf
from vfguard.admission import conflict
from vfguard.admission import static
from vfguard import exception
from vfguard.i18n import _
from vfguard import objects
from vfguard.objects import fields
from vfguard.pci import devspec
from vfguard.pci import registry as pci_registry
from vfguard import utils

CONF = vfguard.conf.CONF
LOG = logging.getLogger(__name__)

NODE_POLICY_KIND = 'SriovNetworkNodePolicy'
OPERATOR_CONFIG_KIND = 'SriovOperatorConfig'


class _ValidationState(object):
    """What one dynamic validation has seen so far."""

    def __init__(self):
        self.nodes_selected = False
        self.interface_selected = False


class PolicyValidator(object):

    def __init__(self, inventory, registry=None, conf=None):
        """Create a validator.

        :param inventory: an InventoryDriver giving read access to machines,
                          node states and node policies.
        :param registry: a DeviceRegistry; built from ``[devices]`` options
                         when omitted.
        :param conf: the ConfigOpts to read options from.
        """
        self.conf = conf or CONF
        self.inventory = inventory
        self.registry = (registry or
                         pci_registry.DeviceRegistry.from_config(self.conf))

    def _check_operation(self, operation):
        if operation not in fields.Operation.ALL:
            raise exception.UnknownOperation(operation=operation)

    def _is_authoritative(self, obj):
        return obj.namespace == self.conf.admission.namespace

    def validate_node_policy(self, policy, operation):
        """Validate a node policy for an admission operation.

        :param policy: the NodePolicy being created, updated or deleted.
        :param operation: one of ``fields.Operation.ALL``.
        :returns: a ValidationVerdict.
        """
        LOG.debug("Validating node policy %(name)s for %(op)s",
                  {'name': policy.name, 'op': operation})
        warnings = []
        try:
            self._validate_node_policy(policy, operation, warnings)
        except exception.VFGuardException as exc:
            LOG.info("Node policy %(name)s rejected: %(reason)s",
                     {'name': policy.name, 'reason': exc.format_message()})
            return objects.ValidationVerdict.denied(exc, warnings)
        return objects.ValidationVerdict.admitted(warnings)

    def _validate_node_policy(self, policy, operation, warnings):
        self._check_operation(operation)
        admission_conf = self.conf.admission

        if (policy.name == admission_conf.default_policy_name and
                self._is_authoritative(policy)):
            if operation == fields.Operation.DELETE:
                raise exception.DeletionForbidden(kind=NODE_POLICY_KIND)
            # The default policy is managed by the operator itself.
            return

        if not self._is_authoritative(policy):
            warnings.append(
                _("%(name)s is created or updated but not used. Only policy "
                  "in %(namespace)s namespace is respected.") %
                {'name': policy.name, 'namespace': admission_conf.namespace})

        if operation == fields.Operation.DELETE:
            return

        checker = static.StaticPolicyChecker(
            self.registry, dev_mode=admission_conf.dev_mode)
        checker.check(policy)
        self._dynamic_validate(policy)

    def _retrieve(self, resource, func, *args):
        try:
            return list(func(*args))
        except exception.RetrievalError:
            raise
        except Exception as exc:
            LOG.error("Failed to retrieve %(resource)s: %(exc)s",
                      {'resource': resource, 'exc': exc})
            raise exception.RetrievalError(resource=resource, reason=exc)

    def _dynamic_validate(self, policy):
        state = _ValidationState()
        namespace = self.conf.admission.namespace

        machines = self._retrieve(
            'machines', self.inventory.list_machines,
            utils.format_label_selector(policy.node_selector))
        node_states = self._retrieve(
            'node states', self.inventory.list_node_states, namespace)
        policies = self._retrieve(
            'node policies', self.inventory.list_policies, namespace)

        nic_spec = devspec.NicSelectorSpec(policy.nic_selector,
                                           self.registry)
        for machine in machines:
            if not policy.selects(machine):
                continue
            state.nodes_selected = True

            for node_state in node_states:
                if node_state.name == machine.name:
                    self._validate_for_node_state(
                        policy, nic_spec, node_state, machine, state)

            # Policies in the API may not be reflected in node states yet.
            for other in policies:
                if other.name != policy.name and other.selects(machine):
                    conflict.check_policy_conflict(policy, other)

        if not state.nodes_selected:
            raise exception.NoMatchingNode(policy=policy.name)
        if not state.interface_selected:
            raise exception.NoSupportedNicSelected(policy=policy.name)

    def _validate_for_node_state(self, policy, nic_spec, node_state,
                                 machine, state):
        LOG.debug("Validating policy %(policy)s for node %(node)s",
                  {'policy': policy.name, 'node': node_state.name})
        for iface in node_state.interfaces:
            if nic_spec.match(iface, machine):
                state.interface_selected = True
                self._check_interface(policy, iface)

    def _check_interface(self, policy, iface):
        devices_conf = self.conf.devices
        num_vfs = policy.num_vfs

        if (policy.name != self.conf.admission.default_policy_name and
                num_vfs == 0):
            raise exception.ZeroVfsNotAllowed(num_vfs=num_vfs,
                                              policy=policy.name)
        if (iface.vendor == devices_conf.physical_nic_vendor and
                num_vfs > iface.total_vfs):
            raise exception.NumVfsExceedsLimit(
                num_vfs=num_vfs, policy=policy.name, limit=iface.total_vfs)
        if (iface.vendor == devices_conf.smartnic_vendor and
                num_vfs > devices_conf.smartnic_max_vfs):
            raise exception.NumVfsExceedsLimit(
                num_vfs=num_vfs, policy=policy.name,
                limit=devices_conf.smartnic_max_vfs)
        if (policy.vdpa_type == fields.VdpaType.VIRTIO and
                iface.vendor != devices_conf.smartnic_vendor):
            raise exception.VdpaUnsupportedVendor(vendor=iface.vendor,
                                                  policy=policy.name)

    def validate_operator_config(self, config, operation):
        """Validate the cluster wide operator configuration.

        Only the default configuration object is honoured; it may be
        changed but never deleted.

        :returns: a ValidationVerdict.
        """
        LOG.debug("Validating operator config %(name)s for %(op)s",
                  {'name': config.name, 'op': operation})
        warnings = []
        try:
            self._check_operation(operation)
            if config.name != self.conf.admission.default_config_name:
                raise exception.InvalidOperatorConfig()
            if operation == fields.Operation.DELETE:
                raise exception.DeletionForbidden(kind=OPERATOR_CONFIG_KIND)
            if config.disable_drain:
                warnings.append(
                    _("Node draining is disabled for applying "
                      "SriovNetworkNodePolicy, it may result in workload "
                      "interruption."))
        except exception.VFGuardException as exc:
            return objects.ValidationVerdict.denied(exc, warnings)
        return objects.ValidationVerdict.admitted(warnings)
