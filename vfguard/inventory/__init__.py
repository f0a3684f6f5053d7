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

"""Read-only access to the cluster state the admission engine works on."""

import abc

from oslo_log import log as logging
from oslo_utils import importutils

import vfguard.conf
from vfguard import exception

CONF = vfguard.conf.CONF
LOG = logging.getLogger(__name__)


class InventoryDriver(metaclass=abc.ABCMeta):
    """Base class for inventory drivers.

    Drivers must return snapshots; the admission engine never writes back.
    Failures to reach the underlying store should be raised as
    ``RetrievalError``. Any other exception is converted by the caller.
    """

    @abc.abstractmethod
    def list_machines(self, label_selector=''):
        """Return the MachineDescriptors matching a label selector.

        :param label_selector: ``key=value`` terms separated by commas; an
                               empty selector matches every machine.
        """

    @abc.abstractmethod
    def list_node_states(self, namespace):
        """Return the NodeStates (per machine NIC inventory)."""

    @abc.abstractmethod
    def list_policies(self, namespace):
        """Return the NodePolicies present in a namespace."""


def load_inventory_driver(driver=None, **kwargs):
    """Load the inventory driver named by ``[admission] inventory_driver``.

    :param driver: a class path overriding the configured driver.
    :param kwargs: passed on to the driver constructor.
    """
    driver = driver or CONF.admission.inventory_driver
    LOG.info("Loading inventory driver '%s'", driver)
    try:
        inventory = importutils.import_object(driver, **kwargs)
    except ImportError as exc:
        LOG.exception("Unable to load the inventory driver")
        raise exception.InventoryDriverNotFound(driver=driver, reason=exc)

    if not isinstance(inventory, InventoryDriver):
        raise exception.InventoryDriverNotFound(
            driver=driver, reason='not an InventoryDriver')
    return inventory
