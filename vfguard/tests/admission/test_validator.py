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

from concurrent import futures
from unittest import mock

from vfguard.admission import validator
from vfguard import exception
from vfguard.inventory import fake
from vfguard import objects
from vfguard.objects import fields
from vfguard import test
from vfguard.tests import fake_inventory

CREATE = fields.Operation.CREATE
UPDATE = fields.Operation.UPDATE
DELETE = fields.Operation.DELETE


class _ValidatorTestBase(test.TestCase):

    def setUp(self):
        super(_ValidatorTestBase, self).setUp()
        self.inventory = fake.FakeInventory(
            machines=[fake_inventory.fake_machine()],
            node_states=[fake_inventory.fake_node_state()])
        self.validator = validator.PolicyValidator(self.inventory)

    def _validate(self, operation=CREATE, **updates):
        policy = fake_inventory.fake_policy(**updates)
        return self.validator.validate_node_policy(policy, operation)

    def _assert_denied(self, verdict, reason, code=400):
        self.assertFalse(verdict.admit)
        self.assertEqual(code, verdict.code)
        self.assertEqual(reason, verdict.reason)


class ValidateNodePolicyTestCase(_ValidatorTestBase):

    def test_valid_policy(self):
        for operation in (CREATE, UPDATE):
            verdict = self._validate(operation)
            self.assertTrue(verdict.admit)
            self.assertEqual(200, verdict.code)
            self.assertIsNone(verdict.reason)
            self.assertEqual([], verdict.warnings)

    def test_unknown_operation(self):
        verdict = self._validate('CONNECT')
        self._assert_denied(verdict,
                            'Unknown admission operation CONNECT')

    def test_delete_default_policy(self):
        verdict = self._validate(DELETE, name='default')
        self._assert_denied(
            verdict, "default SriovNetworkNodePolicy shouldn't be deleted")

    def test_delete_policy(self):
        # Deletion is admitted without looking at the cluster.
        self.inventory.machines = []
        verdict = self._validate(DELETE, resource_name='not-valid')
        self.assertTrue(verdict.admit)
        self.assertEqual([], verdict.warnings)

    def test_default_policy_is_not_validated(self):
        verdict = self._validate(name='default', nic_selector={},
                                 num_vfs=0)
        self.assertTrue(verdict.admit)

    def test_policy_in_other_namespace(self):
        verdict = self._validate(namespace='default')
        self.assertTrue(verdict.admit)
        self.assertEqual(
            ['policy-a is created or updated but not used. Only policy in '
             'sriov-network-operator namespace is respected.'],
            verdict.warnings)

    def test_delete_default_policy_in_other_namespace(self):
        verdict = self._validate(DELETE, name='default', namespace='default')
        self.assertTrue(verdict.admit)
        self.assertEqual(1, len(verdict.warnings))

    def test_warnings_kept_on_denial(self):
        verdict = self._validate(namespace='default', resource_name='a-b')
        self.assertFalse(verdict.admit)
        self.assertEqual(1, len(verdict.warnings))

    def test_authoritative_namespace_from_config(self):
        self.flags(namespace='default', group='admission')
        verdict = self._validate(namespace='default')
        self.assertTrue(verdict.admit)
        self.assertEqual([], verdict.warnings)

    def test_static_rule_violation(self):
        verdict = self._validate(nic_selector={})
        self._assert_denied(
            verdict,
            'at least one of these parameters (vendor, deviceID, pfNames, '
            'rootDevices or netFilter) has to be defined in nicSelector in '
            'CR policy-a')

    def test_unsupported_vendor(self):
        verdict = self._validate(nic_selector={'vendor': 'dead'})
        self._assert_denied(verdict, 'vendor dead is not supported')

    def test_dev_mode_admits_unsupported_vendor(self):
        self.flags(dev_mode=True, group='admission')
        self.inventory.node_states = [fake_inventory.fake_node_state(
            interfaces=[fake_inventory.fake_interface(vendor='dead')])]
        verdict = self._validate(nic_selector={'vendor': 'dead'})
        # The NIC is not a supported model, so it is never selected.
        self._assert_denied(
            verdict,
            'no supported NIC is selected by the nicSelector in CR policy-a')

    def test_no_matching_node(self):
        verdict = self._validate(node_selector={'zone': 'nowhere'})
        self._assert_denied(
            verdict,
            'no matched node is selected by the nodeSelector in CR policy-a')

    def test_no_matching_interface(self):
        verdict = self._validate(nic_selector={'pf_names': ['ens9f0']})
        self._assert_denied(
            verdict,
            'no supported NIC is selected by the nicSelector in CR policy-a')

    def test_no_node_state(self):
        self.inventory.node_states = []
        verdict = self._validate()
        self.assertIsInstance(verdict, objects.ValidationVerdict)
        self._assert_denied(
            verdict,
            'no supported NIC is selected by the nicSelector in CR policy-a')

    def test_node_state_of_other_machine_is_ignored(self):
        self.inventory.node_states = [
            fake_inventory.fake_node_state(name='worker-1')]
        verdict = self._validate()
        self.assertFalse(verdict.admit)

    def test_one_selected_machine_is_enough(self):
        self.inventory.machines.append(
            fake_inventory.fake_machine(name='worker-1'))
        verdict = self._validate()
        self.assertTrue(verdict.admit)

    def test_root_device_address_case(self):
        verdict = self._validate(
            nic_selector={'root_devices': ['0000:3B:00.0']})
        self.assertTrue(verdict.admit)

    def test_zero_vfs(self):
        verdict = self._validate(num_vfs=0)
        self._assert_denied(verdict,
                            'numVfs(0) in CR policy-a is not allowed')

    def test_intel_total_vfs(self):
        self.assertTrue(self._validate(num_vfs=64).admit)
        verdict = self._validate(num_vfs=65)
        self._assert_denied(
            verdict,
            'numVfs(65) in CR policy-a exceed the maximum allowed value(64)')

    def _use_mellanox_nic(self):
        self.inventory.node_states = [fake_inventory.fake_node_state(
            interfaces=[fake_inventory.fake_interface(
                name='ens2f0', vendor='15b3', device_id='101d',
                total_vfs=512)])]

    def test_mellanox_max_vfs(self):
        self._use_mellanox_nic()
        nic_selector = {'pf_names': ['ens2f0']}
        self.assertTrue(
            self._validate(nic_selector=nic_selector, num_vfs=128).admit)
        verdict = self._validate(nic_selector=nic_selector, num_vfs=129)
        self._assert_denied(
            verdict,
            'numVfs(129) in CR policy-a exceed the maximum allowed '
            'value(128)')

    def test_mellanox_max_vfs_from_config(self):
        self.flags(smartnic_max_vfs=256, group='devices')
        self._use_mellanox_nic()
        verdict = self._validate(nic_selector={'pf_names': ['ens2f0']},
                                 num_vfs=200)
        self.assertTrue(verdict.admit)

    def test_vdpa_on_mellanox(self):
        self._use_mellanox_nic()
        verdict = self._validate(nic_selector={'pf_names': ['ens2f0']},
                                 vdpa_type='virtio',
                                 eswitch_mode='switchdev')
        self.assertTrue(verdict.admit)

    def test_vdpa_on_intel(self):
        verdict = self._validate(vdpa_type='virtio',
                                 eswitch_mode='switchdev')
        self._assert_denied(
            verdict, 'vendor(8086) in CR policy-a not supported for '
                     'virtio-vdpa')

    def test_vf_on_virtualization_platform(self):
        net_filter = 'openstack/NetworkID:2f3c6a4e'
        self.inventory.machines = [fake_inventory.fake_machine(
            provider_id='openstack:///0f6b3f0e')]
        self.inventory.node_states = [fake_inventory.fake_node_state(
            interfaces=[fake_inventory.fake_interface(
                device_id='154c', net_filter=net_filter)])]
        verdict = self._validate(nic_selector={'net_filter': net_filter})
        self.assertTrue(verdict.admit)

    def test_vf_on_bare_metal(self):
        net_filter = 'openstack/NetworkID:2f3c6a4e'
        self.inventory.node_states = [fake_inventory.fake_node_state(
            interfaces=[fake_inventory.fake_interface(
                device_id='154c', net_filter=net_filter)])]
        verdict = self._validate(nic_selector={'net_filter': net_filter})
        self.assertFalse(verdict.admit)

    def test_validations_do_not_share_state(self):
        self.assertTrue(self._validate().admit)
        verdict = self._validate(nic_selector={'pf_names': ['ens9f0']})
        self._assert_denied(
            verdict,
            'no supported NIC is selected by the nicSelector in CR policy-a')

    def test_concurrent_validations(self):
        requests = [({'pf_names': ['ens1f0']}, True),
                    ({'pf_names': ['ens9f0']}, False)] * 8
        policies = [fake_inventory.fake_policy(name='policy-%d' % i,
                                               nic_selector=selector)
                    for i, (selector, _admit) in enumerate(requests)]
        with futures.ThreadPoolExecutor(max_workers=4) as executor:
            verdicts = list(executor.map(
                lambda policy: self.validator.validate_node_policy(
                    policy, CREATE), policies))
        self.assertEqual([admit for _selector, admit in requests],
                         [verdict.admit for verdict in verdicts])


class PolicyConflictTestCase(_ValidatorTestBase):

    def _add_policy(self, **updates):
        self.inventory.policies.append(fake_inventory.fake_policy(**updates))

    def test_conflicting_policy(self):
        self._add_policy(name='policy-b')
        verdict = self._validate()
        self._assert_denied(
            verdict, 'VF index range in ens1f0 is overlapped with existing '
                     'policy policy-b (ens1f0)')

    def test_disjoint_ranges(self):
        self._add_policy(name='policy-b',
                         nic_selector={'pf_names': ['ens1f0#4-7']})
        verdict = self._validate(nic_selector={'pf_names': ['ens1f0#0-3']})
        self.assertTrue(verdict.admit)

    def test_update_of_same_policy(self):
        self._add_policy()
        verdict = self._validate(UPDATE, num_vfs=16)
        self.assertTrue(verdict.admit)

    def test_policy_on_other_machines(self):
        self._add_policy(name='policy-b', node_selector={'zone': 'b'})
        verdict = self._validate()
        self.assertTrue(verdict.admit)

    def test_policy_in_other_namespace(self):
        self._add_policy(name='policy-b', namespace='default')
        verdict = self._validate()
        self.assertTrue(verdict.admit)

    def test_conflict_without_node_state(self):
        # Policies are compared even before the node reports its NICs.
        self.inventory.node_states = []
        self._add_policy(name='policy-b')
        verdict = self._validate()
        self.assertIn('overlapped', verdict.reason)

    def test_invalid_pf_name_in_existing_policy(self):
        self._add_policy(name='policy-b',
                         nic_selector={'pf_names': ['ens1f0#7-2']})
        verdict = self._validate()
        self.assertTrue(verdict.admit)


class InventoryFailureTestCase(_ValidatorTestBase):

    def test_driver_failure(self):
        with mock.patch.object(self.inventory, 'list_machines',
                               side_effect=RuntimeError('timed out')):
            verdict = self._validate()
        self._assert_denied(
            verdict, 'Unable to retrieve machines: timed out', code=503)

    def test_driver_retrieval_error(self):
        exc = exception.RetrievalError(resource='node policies',
                                       reason='forbidden')
        with mock.patch.object(self.inventory, 'list_policies',
                               side_effect=exc):
            verdict = self._validate()
        self._assert_denied(
            verdict, 'Unable to retrieve node policies: forbidden', code=503)

    def test_label_selector_passed_to_driver(self):
        with mock.patch.object(self.inventory, 'list_machines',
                               return_value=[]) as list_machines:
            self._validate(node_selector={'zone': 'a', 'rack': '1'})
        list_machines.assert_called_once_with('rack=1,zone=a')

    def test_delete_does_not_query_driver(self):
        with mock.patch.object(self.inventory, 'list_machines') as lm:
            self._validate(DELETE)
        lm.assert_not_called()


class ValidateOperatorConfigTestCase(_ValidatorTestBase):

    def _validate_config(self, operation=UPDATE, **updates):
        config = {'name': 'default',
                  'namespace': fake_inventory.NAMESPACE}
        config.update(updates)
        return self.validator.validate_operator_config(
            objects.OperatorConfig(**config), operation)

    def test_default_config(self):
        for operation in (CREATE, UPDATE):
            verdict = self._validate_config(operation)
            self.assertTrue(verdict.admit)
            self.assertEqual([], verdict.warnings)

    def test_disable_drain(self):
        verdict = self._validate_config(disable_drain=True)
        self.assertTrue(verdict.admit)
        self.assertEqual(1, len(verdict.warnings))
        self.assertIn('Node draining is disabled', verdict.warnings[0])

    def test_other_config(self):
        verdict = self._validate_config(name='custom')
        self._assert_denied(verdict,
                            'only default SriovOperatorConfig is used')

    def test_delete_default_config(self):
        verdict = self._validate_config(DELETE)
        self._assert_denied(
            verdict, "default SriovOperatorConfig shouldn't be deleted")

    def test_unknown_operation(self):
        verdict = self._validate_config('PATCH')
        self.assertFalse(verdict.admit)
