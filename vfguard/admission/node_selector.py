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

"""Scheduling hints derived from the node selectors of node policies."""

NODE_SELECTOR_OP_IN = 'In'


def node_selector_terms_for_policies(policies):
    """Merge the node selectors of policies into node affinity terms.

    Each policy contributes one term, and each label of its node selector one
    match expression of that term. Terms are ORed by the scheduler and the
    expressions of a term are ANDed, so a node matches the result exactly
    when it is selected by at least one of the policies.

    :param policies: an ordered sequence of NodePolicy objects.
    :returns: a list of ``{'matchExpressions': [...]}`` dicts, in policy
              order, with expressions in node selector key order.
    """
    terms = []
    for policy in policies:
        expressions = [
            {'key': key, 'operator': NODE_SELECTOR_OP_IN, 'values': [value]}
            for key, value in policy.node_selector.items()]
        terms.append({'matchExpressions': expressions})
    return terms
