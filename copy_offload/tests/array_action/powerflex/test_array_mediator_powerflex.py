import unittest

from mock import patch, Mock
from PyPowerFlex import exceptions as powerflex_exceptions

import copy_offload.array_action.errors as array_errors
import copy_offload.tests.common.test_settings as common_settings
from copy_offload.array_action.array_action_types import ArrayConnectionInfo, Lun, MappingContext
from copy_offload.array_action.array_mediator_powerflex import PowerFlexArrayMediator
from copy_offload.common import settings
from copy_offload.tests.array_action.powerflex.fake_powerflex_client import FakePowerFlexClient, SYSTEM_ID

SDC_ID = "c4a2c42b00000001"
OTHER_SDC_ID = "c4a2c42b00000002"
SDC_GUID = "9BD4F5DE-D8B6-4C73-8C0C-3E3C7A3F5D10"
SDC_IP = "10.0.0.11"


def _get_connection_info(system_id=None):
    return ArrayConnectionInfo(array_type=settings.ARRAY_TYPE_POWERFLEX,
                               endpoint=common_settings.SECRET_MANAGEMENT_ADDRESS_VALUE,
                               user=common_settings.SECRET_USERNAME_VALUE,
                               password=common_settings.SECRET_PASSWORD_VALUE,
                               system_id=system_id)


class BasePowerFlexMediatorSetUp(unittest.TestCase):

    def setUp(self):
        self.fake_client = FakePowerFlexClient()
        patcher = patch("copy_offload.array_action.array_mediator_powerflex.PowerFlexRESTClient")
        self.connect_mock = patcher.start()
        self.addCleanup(patcher.stop)
        self.connect_mock.return_value = self.fake_client

        self.mediator = PowerFlexArrayMediator(_get_connection_info(SYSTEM_ID))

        self.fake_client.add_sdc(SDC_ID, common_settings.HOST_NAME, guid=SDC_GUID, ip=SDC_IP)
        self.fake_client.add_sdc(OTHER_SDC_ID, common_settings.OTHER_HOST_NAME)
        self.fake_client.add_volume(common_settings.VOLUME_SERIAL)
        self.lun = Lun(name=common_settings.VOLUME_SERIAL, serial_number=common_settings.VOLUME_SERIAL)


class TestPowerFlexConnect(BasePowerFlexMediatorSetUp):

    def test_connect_with_wrong_credentials(self):
        self.connect_mock.side_effect = [powerflex_exceptions.PowerFlexClientException("unauthorized")]
        with self.assertRaises(array_errors.CredentialsError):
            PowerFlexArrayMediator(_get_connection_info())

    def test_connect_to_unknown_system(self):
        with self.assertRaises(array_errors.ObjectNotFoundError):
            PowerFlexArrayMediator(_get_connection_info("unknown"))

    def test_connect_without_system_id(self):
        mediator = PowerFlexArrayMediator(_get_connection_info())
        self.assertIsNone(mediator.system_id)


class TestPowerFlexResolveVolumeHandle(BasePowerFlexMediatorSetUp):

    def test_resolve_volume_handle(self):
        lun = self.mediator.resolve_volume_handle_to_lun(common_settings.VOLUME_HANDLE)
        self.assertEqual(common_settings.VOLUME_HANDLE_VOLUME_ID, lun.name)
        self.assertEqual(common_settings.VOLUME_HANDLE_VOLUME_ID, lun.serial_number)
        self.assertEqual(common_settings.VOLUME_HANDLE, lun.volume_handle)

    def test_resolve_malformed_volume_handle(self):
        with self.assertRaises(array_errors.InvalidVolumeHandleError):
            self.mediator.resolve_volume_handle_to_lun(common_settings.MALFORMED_VOLUME_HANDLE)

    def test_resolve_pv_to_system_id(self):
        self.assertEqual(common_settings.VOLUME_HANDLE_SYSTEM_ID,
                         self.mediator.resolve_pv_to_system_id(common_settings.VOLUME_HANDLE))


class TestPowerFlexEnsureClonnerIgroup(BasePowerFlexMediatorSetUp):

    def test_ensure_by_sdc_id(self):
        mapping_context = self.mediator.ensure_clonner_igroup(SDC_ID, [])
        self.assertEqual(MappingContext(host_id=SDC_ID, logical_host_name=SDC_ID,
                                        real_host_name=common_settings.HOST_NAME), mapping_context)

    def test_ensure_by_sdc_guid(self):
        mapping_context = self.mediator.ensure_clonner_igroup(common_settings.INITIATOR_GROUP, [SDC_GUID])
        self.assertEqual(SDC_ID, mapping_context.host_id)
        self.assertEqual(common_settings.INITIATOR_GROUP, mapping_context.logical_host_name)

    def test_ensure_by_sdc_ip(self):
        mapping_context = self.mediator.ensure_clonner_igroup(common_settings.INITIATOR_GROUP,
                                                              [common_settings.FC_ADAPTER_ID, SDC_IP])
        self.assertEqual(SDC_ID, mapping_context.host_id)

    def test_ensure_twice_returns_same_context(self):
        first_context = self.mediator.ensure_clonner_igroup(common_settings.INITIATOR_GROUP, [SDC_GUID])
        second_context = self.mediator.ensure_clonner_igroup(common_settings.INITIATOR_GROUP, [SDC_GUID])
        self.assertEqual(first_context, second_context)

    def test_ensure_not_found(self):
        with self.assertRaises(array_errors.HostNotFoundByAdapterIdsError):
            self.mediator.ensure_clonner_igroup(common_settings.INITIATOR_GROUP, [common_settings.FC_ADAPTER_ID])


class TestPowerFlexMapping(BasePowerFlexMediatorSetUp):

    def setUp(self):
        super().setUp()
        self.mapping_context = self.mediator.ensure_clonner_igroup(common_settings.INITIATOR_GROUP, [SDC_GUID])

    def test_map_twice_creates_one_mapping(self):
        self.mediator.map(common_settings.INITIATOR_GROUP, self.lun, self.mapping_context)
        self.assertEqual([SDC_ID], self.mediator.current_mapped_groups(self.lun, self.mapping_context))
        self.mediator.map(common_settings.INITIATOR_GROUP, self.lun, self.mapping_context)
        self.assertEqual(1, self.fake_client.map_calls)
        self.assertEqual([SDC_ID], self.mediator.current_mapped_groups(self.lun, self.mapping_context))

    def test_current_mapped_groups_not_mapped(self):
        self.assertEqual([], self.mediator.current_mapped_groups(self.lun, self.mapping_context))

    def test_map_to_sdc_id_group_without_context(self):
        self.mediator.map(OTHER_SDC_ID, self.lun, None)
        self.assertEqual([OTHER_SDC_ID], self.mediator.current_mapped_groups(self.lun, None))

    def test_map_with_missing_host_id(self):
        with self.assertRaises(array_errors.MappingContextKeyMissingError):
            self.mediator.map(common_settings.INITIATOR_GROUP, self.lun,
                              MappingContext(logical_host_name=common_settings.INITIATOR_GROUP))

    def test_map_volume_not_found(self):
        with self.assertRaises(array_errors.ObjectNotFoundError):
            self.mediator.map(common_settings.INITIATOR_GROUP, Lun(serial_number="missing"), self.mapping_context)

    def test_unmap_twice(self):
        self.mediator.map(common_settings.INITIATOR_GROUP, self.lun, self.mapping_context)
        self.mediator.unmap(common_settings.INITIATOR_GROUP, self.lun, self.mapping_context)
        self.assertEqual([], self.mediator.current_mapped_groups(self.lun, self.mapping_context))
        self.mediator.unmap(common_settings.INITIATOR_GROUP, self.lun, self.mapping_context)

    def test_unmap_keeps_other_sdc_mapping(self):
        self.fake_client.add_volume(common_settings.VOLUME_SERIAL, mapped_sdc_ids=[OTHER_SDC_ID, SDC_ID])
        self.mediator.unmap(common_settings.INITIATOR_GROUP, self.lun, self.mapping_context)
        self.assertEqual([OTHER_SDC_ID], self.mediator.current_mapped_groups(self.lun, self.mapping_context))

    def test_current_mapped_groups_with_unknown_sdc(self):
        self.fake_client.add_volume(common_settings.VOLUME_SERIAL, mapped_sdc_ids=["unknown"])
        with self.assertRaises(array_errors.UnresolvableVolumeMappingsError):
            self.mediator.current_mapped_groups(self.lun, self.mapping_context)


class TestPowerFlexErrorTranslation(unittest.TestCase):

    def setUp(self):
        patcher = patch("copy_offload.array_action.array_mediator_powerflex.PowerFlexRESTClient")
        patcher.start()
        self.addCleanup(patcher.stop)
        self.mediator = PowerFlexArrayMediator(_get_connection_info())
        self.mediator.client = Mock()
        self.mediator.client.get_volume.return_value = {'id': common_settings.VOLUME_SERIAL}
        self.lun = Lun(serial_number=common_settings.VOLUME_SERIAL)

    def test_map_already_mapped_concurrently(self):
        self.mediator.client.get_volume_mappings.return_value = []
        self.mediator.client.map_volume_to_sdc.side_effect = [
            powerflex_exceptions.PowerFlexClientException("The volume is already mapped to this SDC")]
        self.mediator.map(SDC_ID, self.lun, None)
        self.mediator.client.map_volume_to_sdc.assert_called_once_with(common_settings.VOLUME_SERIAL, SDC_ID)

    def test_map_backend_failure(self):
        self.mediator.client.get_volume_mappings.return_value = []
        self.mediator.client.map_volume_to_sdc.side_effect = [
            powerflex_exceptions.PowerFlexClientException(common_settings.DUMMY_ERROR_MESSAGE)]
        with self.assertRaises(array_errors.MappingError):
            self.mediator.map(SDC_ID, self.lun, None)

    def test_unmap_not_mapped_concurrently(self):
        self.mediator.client.get_volume_mappings.return_value = [Mock(host_id=SDC_ID, clustered=False)]
        self.mediator.client.unmap_volume_from_sdc.side_effect = [
            powerflex_exceptions.PowerFlexClientException("The volume is not mapped to the SDC")]
        self.mediator.unmap(SDC_ID, self.lun, None)

    def test_unmap_backend_failure(self):
        self.mediator.client.get_volume_mappings.return_value = [Mock(host_id=SDC_ID, clustered=False)]
        self.mediator.client.unmap_volume_from_sdc.side_effect = [
            powerflex_exceptions.PowerFlexClientException(common_settings.DUMMY_ERROR_MESSAGE)]
        with self.assertRaises(array_errors.UnmappingError):
            self.mediator.unmap(SDC_ID, self.lun, None)

    def test_get_volume_failure(self):
        self.mediator.client.get_volume.side_effect = [
            powerflex_exceptions.PowerFlexClientException(common_settings.DUMMY_ERROR_MESSAGE)]
        with self.assertRaises(array_errors.BackendTransportError):
            self.mediator.current_mapped_groups(self.lun, None)
