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

from oslo_config import cfg

admission_group = cfg.OptGroup(
    name='admission',
    title='Policy admission options',
    help="""
Options controlling how SR-IOV node policies are validated before they are
admitted into the cluster.
""")

admission_opts = [
    cfg.StrOpt('namespace',
        default='sriov-network-operator',
        help="""
Namespace whose node policies are authoritative.

Policies created in any other namespace are still admitted, but the verdict
carries a warning that they will not be used.
"""),
    cfg.BoolOpt('dev_mode',
        default=False,
        help="""
Admit NICs that are not in the supported model list.

When enabled, the vendor and device ID checks of the static policy rules are
skipped. This is intended for development and CI environments only.

Related options:

* ``[devices] supported_models``
"""),
    cfg.StrOpt('default_policy_name',
        default='default',
        help="""
Name of the distinguished default node policy.

The default policy in the authoritative namespace cannot be deleted and is
admitted without further validation.
"""),
    cfg.StrOpt('default_config_name',
        default='default',
        help="""
Name of the only operator configuration object that is accepted.
"""),
    cfg.StrOpt('inventory_driver',
        default='vfguard.inventory.fake.FakeInventory',
        help="""
Inventory driver used to retrieve machines, node states and node policies.

Possible values:

* A fully qualified class name implementing
  ``vfguard.inventory.InventoryDriver``, for example
  ``vfguard.inventory.snapshot.SnapshotInventory``.

Related options:

* ``[admission] snapshot_path``
"""),
    cfg.StrOpt('snapshot_path',
        help="""
Path of the JSON cluster snapshot read by
``vfguard.inventory.snapshot.SnapshotInventory``.
"""),
]


def register_opts(conf):
    conf.register_group(admission_group)
    conf.register_opts(admission_opts, group=admission_group)


def list_opts():
    return {admission_group: admission_opts}
