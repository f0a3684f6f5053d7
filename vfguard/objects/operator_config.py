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

from vfguard.objects import base
from vfguard.objects import fields


@base.VFGuardObjectRegistry.register
class OperatorConfig(base.VFGuardEphemeralObject):
    """Cluster wide operator settings; only one instance is honoured."""

    # Version 1.0: Initial version
    VERSION = '1.0'

    fields = {
        'name': fields.StringField(),
        'namespace': fields.StringField(default=''),
        'disable_drain': fields.BooleanField(default=False),
    }
