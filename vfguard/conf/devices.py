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
from oslo_serialization import jsonutils

# name, vendor ID, PF device ID, VF device ID
_DEFAULT_MODELS = (
    ('Intel_i40e_XXV710', '8086', '158a', '154c'),
    ('Intel_i40e_25G_SFP28', '8086', '158b', '154c'),
    ('Intel_i40e_10G_X710_SFP', '8086', '1572', '154c'),
    ('Intel_ixgbe_10G_X550', '8086', '1563', '1565'),
    ('Intel_i40e_X710_X557_AT_10G', '8086', '1589', '154c'),
    ('Intel_i40e_10G_X710_BASET', '8086', '15ff', '154c'),
    ('Intel_i40e_XL710_40G_QSFP', '8086', '1583', '154c'),
    ('Intel_ice_Columbiaville_E810-CQDA2_2CQDA2', '8086', '1592', '1889'),
    ('Intel_ice_Columbiaville_E810-XXVDA4', '8086', '1593', '1889'),
    ('Intel_ice_Columbiaville_E810-XXVDA2', '8086', '159b', '1889'),
    ('Intel_ice_Columbiaville_E810', '8086', '1591', '1889'),
    ('Nvidia_mlx5_ConnectX-4', '15b3', '1013', '1014'),
    ('Nvidia_mlx5_ConnectX-4LX', '15b3', '1015', '1016'),
    ('Nvidia_mlx5_ConnectX-5', '15b3', '1017', '1018'),
    ('Nvidia_mlx5_ConnectX-5_Ex', '15b3', '1019', '101a'),
    ('Nvidia_mlx5_ConnectX-6', '15b3', '101b', '101c'),
    ('Nvidia_mlx5_ConnectX-6_Dx', '15b3', '101d', '101e'),
    ('Nvidia_mlx5_ConnectX-6_Lx', '15b3', '101f', '101e'),
    ('Nvidia_mlx5_MT42822_BlueField-2_integrated_ConnectX-6_Dx',
     '15b3', 'a2d6', '101e'),
    ('Broadcom_bnxt_BCM57414_2x25G', '14e4', '16d7', '16dc'),
    ('Broadcom_bnxt_BCM75508_2x100G', '14e4', '1750', '1806'),
    ('Qlogic_qede_QL45000_50G', '1077', '1654', '1664'),
    ('Red_Hat_Virtio_network_device', '1af4', '1000', '1000'),
)

devices_group = cfg.OptGroup(
    name='devices',
    title='Supported SR-IOV devices',
    help="""
Registry of NIC models that may be claimed by node policies, and of the
virtualization platforms on which virtual functions may be claimed directly.
""")

devices_opts = [
    cfg.MultiStrOpt('supported_models',
        default=[jsonutils.dumps({'name': name,
                                  'vendor_id': vendor,
                                  'device_id': device,
                                  'vf_device_id': vf_device})
                 for name, vendor, device, vf_device in _DEFAULT_MODELS],
        help="""
A supported NIC model.

Possible Values:

* A JSON dictionary describing one model (multi valued)::

    supported_models = {"name": "Intel_i40e_25G_SFP28",
                        "vendor_id": "8086",
                        "device_id": "158b",
                        "vf_device_id": "154c"}

  ``vendor_id``
    Vendor ID of the physical function in hexadecimal. Required.

  ``device_id``
    Device ID of the physical function in hexadecimal. Required.

  ``vf_device_id``
    Device ID of the virtual functions of this model. Optional; virtual
    functions can only be claimed directly on a virtualization platform when
    it is set.

  ``name``
    Free form description of the model.
"""),
    cfg.ListOpt('virtualization_platforms',
        default=['openstack'],
        help="""
Virtualization platforms on which virtual functions may be claimed.

A machine runs on one of these platforms when the platform name is a case
insensitive substring of the machine's provider ID.
"""),
    cfg.StrOpt('physical_nic_vendor',
        default='8086',
        help="""
Vendor ID whose NICs are limited by the total VF count they report.
"""),
    cfg.StrOpt('smartnic_vendor',
        default='15b3',
        help="""
Vendor ID of the SmartNIC vendor.

NICs of this vendor are limited by ``smartnic_max_vfs`` instead of the VF
count they report, and are the only ones that support virtio/vdpa.
"""),
    cfg.IntOpt('smartnic_max_vfs',
        default=128,
        min=1,
        help="""
Maximum number of VFs a policy may request on a SmartNIC.
"""),
]


def register_opts(conf):
    conf.register_group(devices_group)
    conf.register_opts(devices_opts, group=devices_group)


def list_opts():
    return {devices_group: devices_opts}
