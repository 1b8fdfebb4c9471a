from abc import ABC, abstractmethod


class ArrayMediator(ABC):

    @abstractmethod
    def __init__(self, connection_info):
        """
        This is the init function for the class.
        it should establish the connection to the storage system.

        Args:
            connection_info : ArrayConnectionInfo (endpoint, user, password, insecure flag)

        Raises:
            CredentialsError
        """
        raise NotImplementedError

    @abstractmethod
    def disconnect(self):
        """
        This function disconnect the storage system connection that was opened in the init phase.

        Returns:
            None
        """
        raise NotImplementedError

    @abstractmethod
    def resolve_volume_handle_to_lun(self, volume_handle, volume_attributes=None):
        """
        This function resolves an orchestrator volume handle to the lun on the storage system.
        It does not change anything on the storage system.

        Args:
            volume_handle     : the orchestrator volume handle
            volume_attributes : orchestrator volume attributes (e.g. Name, storage_protocol), optional

        Returns:
            Lun

        Raises:
            ObjectNotFoundError
            InvalidVolumeHandleError
        """
        raise NotImplementedError

    @abstractmethod
    def ensure_clonner_igroup(self, initiator_group, adapter_ids):
        """
        This function creates or locates the initiator group (and the backend host object)
        representing the clonner side of the copy. Calling it again returns the same context
        without creating duplicates.

        Args:
            initiator_group : the initiator group name
            adapter_ids     : the clonner host adapter ids (e.g. fc.<wwnn>:<wwpn>, iqn)

        Returns:
            MappingContext

        Raises:
            HostNotFoundByAdapterIdsError
            GroupSetupError
        """
        raise NotImplementedError

    @abstractmethod
    def map(self, initiator_group, lun, mapping_context):
        """
        This function ensures the lun is mapped to the initiator group.
        Mapping an already mapped lun is a no-op.

        Args:
            initiator_group : the initiator group name
            lun             : the lun to map
            mapping_context : the context returned by ensure_clonner_igroup

        Returns:
            lun : the lun, possibly enriched by the storage system

        Raises:
            MappingContextKeyMissingError
            ObjectNotFoundError
            HostNotFoundError
            MappingError
        """
        raise NotImplementedError

    @abstractmethod
    def unmap(self, initiator_group, lun, mapping_context):
        """
        This function ensures the lun is not mapped to the initiator group.
        Un-mapping an already un-mapped lun is a no-op.

        Args:
            initiator_group : the initiator group name
            lun             : the lun to un-map
            mapping_context : the context returned by ensure_clonner_igroup

        Returns:
            None

        Raises:
            MappingContextKeyMissingError
            ObjectNotFoundError
            HostNotFoundError
            UnmappingError
        """
        raise NotImplementedError

    @abstractmethod
    def current_mapped_groups(self, lun, mapping_context):
        """
        This function returns the groups the lun is currently mapped to.

        Args:
            lun             : the lun
            mapping_context : the context returned by ensure_clonner_igroup

        Returns:
            list of group names, empty when the lun is not mapped

        Raises:
            ObjectNotFoundError
            UnresolvableVolumeMappingsError
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def array_type(self):
        """
        The storage system type this mediator handles (e.g. primera3par, powerflex, infinibox)
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def port(self):
        """
        The storage system management port
        """
        raise NotImplementedError
