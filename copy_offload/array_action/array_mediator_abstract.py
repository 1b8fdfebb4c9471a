from abc import ABC, abstractmethod

import copy_offload.array_action.errors as array_errors
from copy_offload.array_action.array_mediator_interface import ArrayMediator
from copy_offload.common.copy_offload_logger import get_stdout_logger

logger = get_stdout_logger()


class ArrayMediatorAbstract(ArrayMediator, ABC):
    # https://github.com/PyCQA/pylint/issues/3975
    def __init__(self, connection_info):  # pylint: disable=super-init-not-called
        self.connection_info = connection_info
        self.user = connection_info.user
        self.password = connection_info.password
        self.endpoint = connection_info.endpoint
        self.insecure = connection_info.insecure

    def map(self, initiator_group, lun, mapping_context):
        host = self._get_mapping_host(initiator_group, mapping_context)
        logger.info("mapping volume : {0} to initiator group : {1} (host : {2})".format(
            lun.name, initiator_group, host.name))
        volume_id = self._get_volume_id(lun)

        if self._get_host_mapping(volume_id, host) is not None:
            logger.info("idempotent case - volume : {0} is already mapped to host : {1}".format(
                lun.name, host.name))
            return lun

        self._map_volume_to_host(volume_id, host)
        logger.info("finished mapping volume : {0} to initiator group : {1} (host : {2})".format(
            lun.name, initiator_group, host.name))
        return lun

    def unmap(self, initiator_group, lun, mapping_context):
        host = self._get_mapping_host(initiator_group, mapping_context)
        logger.info("un-mapping volume : {0} from initiator group : {1} (host : {2})".format(
            lun.name, initiator_group, host.name))
        volume_id = self._get_volume_id(lun)

        mapping = self._get_host_mapping(volume_id, host)
        if mapping is None:
            logger.info("idempotent case - volume : {0} is already unmapped from host : {1}".format(
                lun.name, host.name))
            return

        try:
            self._unmap_volume_from_host(volume_id, host, mapping)
        except array_errors.VolumeAlreadyUnmappedError as ex:
            logger.info("idempotent case - {0}".format(ex))
            return
        logger.info("finished un-mapping volume : {0} from initiator group : {1} (host : {2})".format(
            lun.name, initiator_group, host.name))

    def current_mapped_groups(self, lun, mapping_context):
        volume_id = self._get_volume_id(lun)
        mappings = self._get_volume_mappings(volume_id)
        logger.debug("found {0} mappings for volume : {1}".format(len(mappings), volume_id))
        if not mappings:
            logger.info("volume : {0} is not mapped to any host".format(volume_id))
            return []

        hosts_by_id = {host.id: host for host in self._get_hosts()}
        mapped_groups = []
        processed_host_ids = set()
        for mapping in mappings:
            if mapping.host_id in processed_host_ids:
                continue
            if mapping.clustered:
                logger.warning(str(array_errors.UnsupportedMappingError(volume_id, mapping.host_cluster_id)))
                continue
            host = hosts_by_id.get(mapping.host_id)
            if not host:
                logger.warning("failed to find host info for host id : {0}. available host ids : {1}".format(
                    mapping.host_id, list(hosts_by_id)))
                continue
            processed_host_ids.add(mapping.host_id)
            group_name = self._get_group_name(host)
            logger.info("volume : {0} is mapped to host : {1} (id : {2}) as lun : {3}".format(
                volume_id, host.name, host.id, mapping.lun))
            mapped_groups.append(group_name)
            if mapping_context is not None and mapping_context.record_mapped_host(host.name):
                logger.debug("recorded host : {0} as the volume mapped host".format(host.name))

        if not mapped_groups:
            raise array_errors.UnresolvableVolumeMappingsError(volume_id, len(mappings))
        return mapped_groups

    def _get_host_mapping(self, volume_id, host):
        for mapping in self._get_volume_mappings(volume_id):
            if mapping.host_id == host.id and not mapping.clustered:
                return mapping
        return None

    def _get_group_name(self, host):
        return host.name

    @abstractmethod
    def _get_mapping_host(self, initiator_group, mapping_context):
        """
        Returns:
            Host : the storage host (or host group) the initiator group is mapped through
        Raises:
            MappingContextKeyMissingError
            HostNotFoundError
        """
        raise NotImplementedError

    @abstractmethod
    def _get_volume_id(self, lun):
        """
        Returns:
            the storage volume id of the lun
        Raises:
            ObjectNotFoundError
            InvalidVolumeIdError
        """
        raise NotImplementedError

    @abstractmethod
    def _get_volume_mappings(self, volume_id):
        """
        Returns:
            list of LunMapping, queried from the storage on every call
        """
        raise NotImplementedError

    @abstractmethod
    def _get_hosts(self):
        """
        Returns:
            list of Host, the storage host catalog
        """
        raise NotImplementedError

    @abstractmethod
    def _map_volume_to_host(self, volume_id, host):
        """
        Raises:
            ObjectNotFoundError
            HostNotFoundError
            MappingError
        """
        raise NotImplementedError

    @abstractmethod
    def _unmap_volume_from_host(self, volume_id, host, mapping):
        """
        Raises:
            VolumeAlreadyUnmappedError
            ObjectNotFoundError
            HostNotFoundError
            UnmappingError
        """
        raise NotImplementedError
