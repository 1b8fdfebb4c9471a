from PyPowerFlex import exceptions as powerflex_exceptions

import copy_offload.array_action.errors as array_errors
from copy_offload.array_action.array_action_types import Host, Lun, MappingContext
from copy_offload.array_action.array_mediator_abstract import ArrayMediatorAbstract
from copy_offload.array_action.powerflex_rest_client import PowerFlexRESTClient
from copy_offload.array_action.utils import ClassProperty
from copy_offload.common import settings
from copy_offload.common.adapter_info import AdapterIdentifiers
from copy_offload.common.config import config
from copy_offload.common.copy_offload_logger import get_stdout_logger
from copy_offload.common.utils import split_volume_handle

logger = get_stdout_logger()

VOLUME_ALREADY_MAPPED_ERROR = "ALREADY MAPPED"
VOLUME_NOT_MAPPED_ERROR = "NOT MAPPED"


class PowerFlexArrayMediator(ArrayMediatorAbstract):
    """
    PowerFlex has no initiator group objects, the SDC id is the group.
    """

    @ClassProperty
    def array_type(self):
        return settings.ARRAY_TYPE_POWERFLEX

    @ClassProperty
    def port(self):
        return config.powerflex.port

    def __init__(self, connection_info):
        super().__init__(connection_info)
        self.system_id = connection_info.system_id
        self.client = None

        logger.debug("in init")
        self._connect()

    def _connect(self):
        logger.debug("connecting to endpoint : {0}".format(self.endpoint))
        try:
            self.client = PowerFlexRESTClient(service_address=self.endpoint,
                                              user=self.user,
                                              password=self.password,
                                              insecure=self.insecure)
            system = self.client.get_system(self.system_id)
        except powerflex_exceptions.PowerFlexClientException as ex:
            logger.exception(ex)
            raise array_errors.CredentialsError(self.endpoint)
        if system is None:
            raise array_errors.ObjectNotFoundError(self.system_id)
        logger.debug("connected to system : {0}".format(system.get('id')))

    def disconnect(self):
        self.client = None

    def resolve_volume_handle_to_lun(self, volume_handle, volume_attributes=None):
        _, volume_id = split_volume_handle(volume_handle)
        logger.debug("volume handle : {0} resolved to volume id : {1}".format(volume_handle, volume_id))
        return Lun(name=volume_id, serial_number=volume_id, volume_handle=volume_handle)

    def resolve_pv_to_system_id(self, volume_handle):
        system_id, _ = split_volume_handle(volume_handle)
        return system_id

    def ensure_clonner_igroup(self, initiator_group, adapter_ids):
        logger.info("ensuring sdc for initiator group : {0} with adapter ids : {1}".format(
            initiator_group, adapter_ids))
        sdcs = self._get_hosts()
        sdc = self._get_sdc_by_id(sdcs, initiator_group)
        if sdc is None:
            sdc, _ = AdapterIdentifiers(adapter_ids).find_matching_host(sdcs)
        logger.info("initiator group : {0} resolved to sdc : {1} (id : {2})".format(
            initiator_group, sdc.name, sdc.id))
        return MappingContext(host_id=sdc.id,
                              logical_host_name=initiator_group,
                              real_host_name=sdc.name)

    @staticmethod
    def _get_sdc_by_id(sdcs, sdc_id):
        for sdc in sdcs:
            if sdc.id == sdc_id:
                return sdc
        return None

    def _get_mapping_host(self, initiator_group, mapping_context):
        sdc_id = initiator_group
        if mapping_context is not None and initiator_group == mapping_context.logical_host_name:
            sdc_id = mapping_context.get_host_id(initiator_group)
        return Host(id=sdc_id, name=sdc_id)

    def _get_volume_id(self, lun):
        volume_id = lun.serial_number or lun.name
        try:
            api_volume = self.client.get_volume(volume_id)
        except powerflex_exceptions.PowerFlexClientException as ex:
            logger.exception(ex)
            raise array_errors.BackendTransportError("get volume", volume_id, ex)
        if api_volume is None:
            raise array_errors.ObjectNotFoundError(volume_id)
        return api_volume['id']

    def _get_volume_mappings(self, volume_id):
        logger.debug("getting mapped sdcs of volume : {0}".format(volume_id))
        try:
            return self.client.get_volume_mappings(volume_id)
        except powerflex_exceptions.PowerFlexClientException as ex:
            logger.exception(ex)
            raise array_errors.BackendTransportError("get volume mappings", volume_id, ex)

    def _get_hosts(self):
        try:
            return self.client.get_sdcs()
        except powerflex_exceptions.PowerFlexClientException as ex:
            logger.exception(ex)
            raise array_errors.BackendTransportError("get sdcs", self.endpoint, ex)

    def _get_group_name(self, host):
        return host.id

    def _map_volume_to_host(self, volume_id, host):
        try:
            self.client.map_volume_to_sdc(volume_id, host.id)
        except powerflex_exceptions.PowerFlexClientException as ex:
            if VOLUME_ALREADY_MAPPED_ERROR in str(ex).upper():
                logger.info("idempotent case - volume : {0} is already mapped to sdc : {1}".format(
                    volume_id, host.id))
                return
            logger.exception(ex)
            raise array_errors.MappingError(volume_id, host.id, ex)

    def _unmap_volume_from_host(self, volume_id, host, mapping):
        try:
            self.client.unmap_volume_from_sdc(volume_id, host.id)
        except powerflex_exceptions.PowerFlexClientException as ex:
            if VOLUME_NOT_MAPPED_ERROR in str(ex).upper():
                raise array_errors.VolumeAlreadyUnmappedError(volume_id)
            logger.exception(ex)
            raise array_errors.UnmappingError(volume_id, host.id, ex)
