from decorator import decorator
from infinisdk.core import exceptions as infinibox_exceptions
from retry import retry

import copy_offload.array_action.errors as array_errors
from copy_offload.array_action.array_action_types import Lun, MappingContext
from copy_offload.array_action.array_mediator_abstract import ArrayMediatorAbstract
from copy_offload.array_action.infinibox_rest_client import InfiniBoxRESTClient
from copy_offload.array_action.settings import CONTEXT_REAL_HOST_NAME
from copy_offload.array_action.utils import (ClassProperty, convert_volume_id_to_int, generate_lun_iqn,
                                             generate_lun_naa)
from copy_offload.common import settings
from copy_offload.common.adapter_info import AdapterIdentifiers
from copy_offload.common.config import config
from copy_offload.common.copy_offload_logger import get_stdout_logger
from copy_offload.common.utils import get_volume_attribute, split_volume_handle

logger = get_stdout_logger()

HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_CONFLICT = 409
HOST_LISTING_RETRY = config.infinibox.host_listing_retry


def handle_rate_limit():
    @decorator
    def translate_rate_limit(mediator_method, mediator, *args):
        try:
            return mediator_method(mediator, *args)
        except infinibox_exceptions.APICommandFailed as ex:
            if ex.status_code == config.infinibox.rate_limit_status_code:
                logger.warning("rate limited by endpoint : {0}, retrying".format(mediator.endpoint))
                raise array_errors.BackendRateLimitedError(mediator.endpoint)
            raise ex

    return translate_rate_limit


class InfiniBoxArrayMediator(ArrayMediatorAbstract):

    @ClassProperty
    def array_type(self):
        return settings.ARRAY_TYPE_INFINIBOX

    @ClassProperty
    def port(self):
        return config.infinibox.port

    def __init__(self, connection_info):
        super().__init__(connection_info)
        self.client = None

        logger.debug("in init")
        if self.insecure:
            logger.warning("certificate verification cannot be disabled for endpoint : {0}, "
                           "the insecure flag is ignored".format(self.endpoint))
        self._connect()

    def _connect(self):
        logger.debug("connecting to endpoint : {0}".format(self.endpoint))
        try:
            self.client = InfiniBoxRESTClient(service_address=self.endpoint,
                                              user=self.user,
                                              password=self.password)
        except infinibox_exceptions.InfiniSDKException as ex:
            logger.exception(ex)
            raise array_errors.CredentialsError(self.endpoint)

    def disconnect(self):
        if self.client:
            self.client.logout()

    def resolve_volume_handle_to_lun(self, volume_handle, volume_attributes=None):
        volume_name = get_volume_attribute(volume_attributes, settings.VOLUME_ATTRIBUTE_NAME_KEY)
        storage_protocol = get_volume_attribute(volume_attributes, settings.VOLUME_ATTRIBUTE_STORAGE_PROTOCOL_KEY)
        if volume_name:
            api_volume = self._get_api_volume(self.client.get_volume_by_name, volume_name)
        else:
            _, volume_id = split_volume_handle(volume_handle)
            api_volume = self._get_api_volume(self.client.get_volume_by_id, self._to_volume_id(volume_id))
        serial = api_volume['serial']
        logger.info("resolved volume handle : {0} to volume : {1} (id : {2})".format(
            volume_handle, api_volume['name'], api_volume['id']))
        return Lun(name=api_volume['name'],
                   ldevice_id=str(api_volume['id']),
                   serial_number=serial,
                   volume_handle=volume_handle,
                   iqn=generate_lun_iqn(serial, storage_protocol),
                   naa=generate_lun_naa(serial))

    def _get_api_volume(self, get_volume, volume_name_or_id):
        try:
            api_volume = get_volume(volume_name_or_id)
        except infinibox_exceptions.InfiniSDKException as ex:
            logger.exception(ex)
            raise array_errors.BackendTransportError("get volume", volume_name_or_id, ex)
        if api_volume is None:
            raise array_errors.ObjectNotFoundError(volume_name_or_id)
        return api_volume

    @staticmethod
    def _to_volume_id(ldevice_id):
        volume_id = convert_volume_id_to_int(ldevice_id)
        if volume_id is None:
            raise array_errors.InvalidVolumeIdError(ldevice_id)
        return volume_id

    def ensure_clonner_igroup(self, initiator_group, adapter_ids):
        logger.info("ensuring initiator group : {0} for adapter ids : {1}".format(initiator_group, adapter_ids))
        host, _ = AdapterIdentifiers(adapter_ids).find_matching_host(self._get_hosts())
        return MappingContext(host_id=host.id,
                              logical_host_name=initiator_group,
                              real_host_name=host.name)

    def _get_mapping_host(self, initiator_group, mapping_context):
        if mapping_context is None:
            raise array_errors.MappingContextKeyMissingError(CONTEXT_REAL_HOST_NAME, initiator_group)
        host_name = mapping_context.get_real_host_name(initiator_group)
        try:
            host = self.client.get_host_by_name(host_name)
        except infinibox_exceptions.InfiniSDKException as ex:
            logger.exception(ex)
            raise array_errors.BackendTransportError("get host", host_name, ex)
        if host is None:
            raise array_errors.HostNotFoundError(host_name)
        return host

    def _get_volume_id(self, lun):
        api_volume = self._get_api_volume(self.client.get_volume_by_id, self._to_volume_id(lun.ldevice_id))
        return api_volume['id']

    def _get_volume_mappings(self, volume_id):
        logger.debug("getting lun mappings for volume id : {0}".format(volume_id))
        try:
            return self.client.get_volume_mappings(volume_id)
        except infinibox_exceptions.APICommandFailed as ex:
            if ex.status_code == HTTP_STATUS_NOT_FOUND:
                raise array_errors.ObjectNotFoundError(volume_id)
            logger.exception(ex)
            raise array_errors.BackendTransportError("get volume luns", volume_id, ex)
        except infinibox_exceptions.InfiniSDKException as ex:
            logger.exception(ex)
            raise array_errors.BackendTransportError("get volume luns", volume_id, ex)

    def _get_hosts(self):
        try:
            hosts = self._list_hosts()
        except infinibox_exceptions.InfiniSDKException as ex:
            logger.exception(ex)
            raise array_errors.BackendTransportError("get hosts", self.endpoint, ex)
        logger.debug("retrieved {0} hosts".format(len(hosts)))
        return hosts

    @retry(array_errors.BackendRateLimitedError, tries=HOST_LISTING_RETRY.tries, delay=HOST_LISTING_RETRY.delay,
           backoff=HOST_LISTING_RETRY.backoff)
    @handle_rate_limit()
    def _list_hosts(self):
        return self.client.get_hosts()

    def _map_volume_to_host(self, volume_id, host):
        try:
            self.client.map_volume_to_host(volume_id, host.id)
        except infinibox_exceptions.APICommandFailed as ex:
            if ex.status_code == HTTP_STATUS_CONFLICT:
                logger.info("idempotent case - volume : {0} is already mapped to host : {1}".format(
                    volume_id, host.name))
                return
            if ex.status_code == HTTP_STATUS_NOT_FOUND:
                raise array_errors.ObjectNotFoundError(volume_id)
            logger.exception(ex)
            raise array_errors.MappingError(volume_id, host.name, ex)
        except infinibox_exceptions.InfiniSDKException as ex:
            logger.exception(ex)
            raise array_errors.MappingError(volume_id, host.name, ex)

    def _unmap_volume_from_host(self, volume_id, host, mapping):
        try:
            self.client.unmap_volume_from_host(volume_id, host.id)
        except infinibox_exceptions.APICommandFailed as ex:
            if ex.status_code == HTTP_STATUS_NOT_FOUND:
                raise array_errors.VolumeAlreadyUnmappedError(volume_id)
            logger.exception(ex)
            raise array_errors.UnmappingError(volume_id, host.name, ex)
        except infinibox_exceptions.InfiniSDKException as ex:
            logger.exception(ex)
            raise array_errors.UnmappingError(volume_id, host.name, ex)
