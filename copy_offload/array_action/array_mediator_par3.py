from hpe3parclient import exceptions as hpe3par_exceptions

import copy_offload.array_action.errors as array_errors
from copy_offload.array_action.array_action_types import Host, Lun, MappingContext
from copy_offload.array_action.array_mediator_abstract import ArrayMediatorAbstract
from copy_offload.array_action.par3_rest_client import Par3RESTClient, to_host_set_target
from copy_offload.array_action.utils import ClassProperty, convert_wwn_to_naa
from copy_offload.common import settings
from copy_offload.common.adapter_info import AdapterIdentifiers
from copy_offload.common.config import config
from copy_offload.common.copy_offload_logger import get_stdout_logger
from copy_offload.common.utils import get_volume_attribute

logger = get_stdout_logger()

CLONNER_HOST_NAME_FORMAT = "{0}-host"


class Par3ArrayMediator(ArrayMediatorAbstract):

    @ClassProperty
    def array_type(self):
        return settings.ARRAY_TYPE_PAR3

    @ClassProperty
    def port(self):
        return config.par3.port

    @ClassProperty
    def max_host_name_length(self):
        return config.par3.max_host_name_length

    def __init__(self, connection_info):
        super().__init__(connection_info)
        self.client = None

        logger.debug("in init")
        self._connect()

    def _connect(self):
        logger.debug("connecting to endpoint : {0}".format(self.endpoint))
        try:
            self.client = Par3RESTClient(service_address=self.endpoint,
                                         user=self.user,
                                         password=self.password,
                                         insecure=self.insecure)
        except (hpe3par_exceptions.HTTPUnauthorized, hpe3par_exceptions.HTTPForbidden) as ex:
            logger.exception(ex)
            raise array_errors.CredentialsError(self.endpoint)
        except hpe3par_exceptions.ClientException as ex:
            logger.error("failed to connect to 3PAR array {0}, reason is {1}".format(self.endpoint, ex))
            raise array_errors.CredentialsError(self.endpoint)

    def disconnect(self):
        if self.client:
            self.client.logout()

    def resolve_volume_handle_to_lun(self, volume_handle, volume_attributes=None):
        volume_name = get_volume_attribute(volume_attributes, settings.VOLUME_ATTRIBUTE_NAME_KEY) or volume_handle
        logger.debug("resolving volume handle : {0} to volume : {1}".format(volume_handle, volume_name))
        api_volume = self._get_api_volume(volume_name)
        wwn = api_volume.get('wwn', '')
        return Lun(name=api_volume['name'],
                   ldevice_id=str(api_volume.get('id', '')),
                   serial_number=wwn,
                   volume_handle=volume_handle,
                   naa=convert_wwn_to_naa(wwn))

    def _get_api_volume(self, volume_name):
        try:
            return self.client.get_volume(volume_name)
        except hpe3par_exceptions.HTTPNotFound as ex:
            logger.exception(ex)
            raise array_errors.ObjectNotFoundError(volume_name)
        except hpe3par_exceptions.ClientException as ex:
            logger.exception(ex)
            raise array_errors.BackendTransportError("get volume", volume_name, ex)

    def ensure_clonner_igroup(self, initiator_group, adapter_ids):
        logger.info("ensuring initiator group : {0} for adapter ids : {1}".format(initiator_group, adapter_ids))
        adapter_identifiers = AdapterIdentifiers(adapter_ids)
        try:
            host_name = self._ensure_clonner_host(initiator_group, adapter_identifiers)
            host_set_members = self._ensure_host_set(initiator_group)
            if host_name not in host_set_members:
                logger.info("adding host : {0} to host set : {1}".format(host_name, initiator_group))
                self.client.add_host_to_host_set(initiator_group, host_name)
        except hpe3par_exceptions.ClientException as ex:
            logger.exception(ex)
            raise array_errors.GroupSetupError(initiator_group, ex)
        logger.info("finished ensuring initiator group : {0} with host : {1}".format(initiator_group, host_name))
        return MappingContext(host_id=initiator_group,
                              logical_host_name=initiator_group,
                              real_host_name=host_name)

    def _ensure_clonner_host(self, initiator_group, adapter_identifiers):
        try:
            host, _ = adapter_identifiers.find_matching_host(self.client.get_hosts())
            return host.name
        except array_errors.HostNotFoundByAdapterIdsError:
            logger.info("no existing host matches adapter ids : {0}".format(adapter_identifiers.adapter_ids))

        fc_wwns = [wwpn.upper() for wwpn in adapter_identifiers.fc_wwpns]
        iscsi_names = adapter_identifiers.other_ids
        if not fc_wwns and not iscsi_names:
            raise array_errors.HostNotFoundByAdapterIdsError(adapter_identifiers.adapter_ids)

        host_name = self._generate_clonner_host_name(initiator_group)
        logger.info("creating host : {0} with fc wwns : {1} and iscsi names : {2}".format(
            host_name, fc_wwns, iscsi_names))
        try:
            self.client.create_host(host_name, fc_wwns, iscsi_names)
        except hpe3par_exceptions.HTTPConflict:
            logger.info("idempotent case - host : {0} already exists".format(host_name))
        return host_name

    def _generate_clonner_host_name(self, initiator_group):
        return CLONNER_HOST_NAME_FORMAT.format(initiator_group)[:self.max_host_name_length]

    def _ensure_host_set(self, host_set_name):
        try:
            return self.client.get_host_set_members(host_set_name)
        except hpe3par_exceptions.HTTPNotFound:
            logger.info("creating host set : {0}".format(host_set_name))
        try:
            self.client.create_host_set(host_set_name)
        except hpe3par_exceptions.HTTPConflict:
            logger.info("idempotent case - host set : {0} already exists".format(host_set_name))
            return self.client.get_host_set_members(host_set_name)
        return []

    def _get_vlun_target(self, initiator_group):
        try:
            self.client.get_host_set_members(initiator_group)
        except hpe3par_exceptions.HTTPNotFound:
            logger.debug("{0} is not a host set, using it as a host name".format(initiator_group))
            return initiator_group
        return to_host_set_target(initiator_group)

    def _get_mapping_host(self, initiator_group, mapping_context):
        return Host(id=initiator_group, name=initiator_group)

    def _get_volume_id(self, lun):
        return self._get_api_volume(lun.name)['name']

    def _get_volume_mappings(self, volume_id):
        logger.debug("getting vluns for volume : {0}".format(volume_id))
        try:
            return self.client.get_volume_vluns(volume_id)
        except hpe3par_exceptions.ClientException as ex:
            logger.exception(ex)
            raise array_errors.BackendTransportError("get vluns", volume_id, ex)

    def _get_hosts(self):
        try:
            return self.client.get_hosts() + self.client.get_host_sets()
        except hpe3par_exceptions.ClientException as ex:
            logger.exception(ex)
            raise array_errors.BackendTransportError("get hosts", self.endpoint, ex)

    def _map_volume_to_host(self, volume_id, host):
        try:
            target = self._get_vlun_target(host.name)
            logger.debug("creating vlun for volume : {0} and target : {1}".format(volume_id, target))
            self.client.create_vlun(volume_id, target)
        except hpe3par_exceptions.HTTPNotFound as ex:
            logger.exception(ex)
            raise array_errors.HostNotFoundError(host.name)
        except hpe3par_exceptions.HTTPConflict:
            logger.info("idempotent case - vlun of volume : {0} and host : {1} already exists".format(
                volume_id, host.name))
        except hpe3par_exceptions.ClientException as ex:
            logger.exception(ex)
            raise array_errors.MappingError(volume_id, host.name, ex)

    def _unmap_volume_from_host(self, volume_id, host, mapping):
        try:
            target = self._get_vlun_target(host.name)
            logger.debug("deleting vlun {0} for volume : {1} and target : {2}".format(mapping.lun, volume_id, target))
            self.client.delete_vlun(volume_id, mapping.lun, target)
        except hpe3par_exceptions.HTTPNotFound:
            raise array_errors.VolumeAlreadyUnmappedError(volume_id)
        except hpe3par_exceptions.ClientException as ex:
            logger.exception(ex)
            raise array_errors.UnmappingError(volume_id, host.name, ex)
