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

# The options of every vfguard component are declared in this package and
# registered on the global CONF object here.

from oslo_config import cfg

from vfguard.conf import admission
from vfguard.conf import devices

CONF = cfg.CONF

admission.register_opts(CONF)
devices.register_opts(CONF)
