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

from vfguard.admission import node_selector
from vfguard import test
from vfguard.tests import fake_inventory


class NodeSelectorTermsTestCase(test.TestCase):

    def _policies(self, *selectors):
        return [fake_inventory.fake_policy(name='policy-%d' % i,
                                           node_selector=selector)
                for i, selector in enumerate(selectors)]

    def test_one_selector(self):
        policies = self._policies({'foo': 'bar'}, {'bb': 'cc'})
        expected = [
            {'matchExpressions': [
                {'key': 'foo', 'operator': 'In', 'values': ['bar']}]},
            {'matchExpressions': [
                {'key': 'bb', 'operator': 'In', 'values': ['cc']}]},
        ]
        self.assertEqual(
            expected, node_selector.node_selector_terms_for_policies(policies))

    def test_two_selectors(self):
        policies = self._policies({'foo': 'bar', 'foo1': 'bar1'},
                                  {'bb': 'cc', 'bb1': 'cc1', 'bb2': 'cc2'})
        expected = [
            {'matchExpressions': [
                {'key': 'foo', 'operator': 'In', 'values': ['bar']},
                {'key': 'foo1', 'operator': 'In', 'values': ['bar1']}]},
            {'matchExpressions': [
                {'key': 'bb', 'operator': 'In', 'values': ['cc']},
                {'key': 'bb1', 'operator': 'In', 'values': ['cc1']},
                {'key': 'bb2', 'operator': 'In', 'values': ['cc2']}]},
        ]
        self.assertEqual(
            expected, node_selector.node_selector_terms_for_policies(policies))

    def test_key_order_is_preserved(self):
        policies = self._policies({'zz': '1', 'aa': '2'})
        terms = node_selector.node_selector_terms_for_policies(policies)
        self.assertEqual(['zz', 'aa'],
                         [e['key'] for e in terms[0]['matchExpressions']])

    def test_no_policies(self):
        self.assertEqual([],
                         node_selector.node_selector_terms_for_policies([]))

    def test_empty_node_selector(self):
        policies = self._policies({})
        self.assertEqual(
            [{'matchExpressions': []}],
            node_selector.node_selector_terms_for_policies(policies))
