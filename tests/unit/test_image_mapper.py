"""Unit tests for image_mapper module."""

import pytest
from azure.mgmt.compute.models import Image

from azmgmt import image_mapper
from azmgmt.image_mapper import ImageMappingError
from azmgmt.models.image import ImageDisk, ImageSpec, ImageStorageProfile
from tests.fixtures.azure_responses import SAMPLE_IMAGE_JSON, VM_ID, make_sdk_image


class TestFromDict:
    """Tests for from_dict."""

    def test_arm_resource_json(self):
        spec = image_mapper.from_dict(SAMPLE_IMAGE_JSON)

        assert spec.name == "ubuntu-golden"
        assert spec.location == "eastus"
        assert spec.resource_group == "images-rg"
        assert spec.tags == {"env": "prod"}
        assert spec.source_virtual_machine_id == VM_ID
        assert spec.hyper_v_generation == "V2"
        assert spec.provisioning_state == "Succeeded"
        assert spec.os_type == "Linux"
        os_disk = spec.storage_profile.os_disk
        assert os_disk.os_state == "Generalized"
        assert os_disk.disk_size_gb == 30
        assert os_disk.managed_disk_id.endswith("/disks/golden-os")
        assert spec.storage_profile.data_disks[0].lun == 0
        assert spec.storage_profile.zone_resilient is True

    def test_flat_snake_case(self):
        spec = image_mapper.from_dict(
            {
                "location": "westus",
                "source_virtual_machine_id": VM_ID,
                "storage_profile": {
                    "os_disk": {"os_type": "Windows", "os_state": "Generalized"},
                    "data_disks": [{"lun": "1", "disk_size_gb": "64"}],
                },
            }
        )

        assert spec.source_virtual_machine_id == VM_ID
        assert spec.os_type == "Windows"
        assert spec.storage_profile.data_disks[0].lun == 1
        assert spec.storage_profile.data_disks[0].disk_size_gb == 64

    def test_empty_object(self):
        assert image_mapper.from_dict({}) == ImageSpec()

    def test_not_an_object(self):
        with pytest.raises(ImageMappingError, match="Image must be an object"):
            image_mapper.from_dict(["not", "an", "object"])

    def test_bad_lun(self):
        with pytest.raises(ImageMappingError, match="lun must be an integer"):
            image_mapper.from_dict({"storageProfile": {"dataDisks": [{"lun": "zero"}]}})

    def test_bad_tags(self):
        with pytest.raises(ImageMappingError, match="tags"):
            image_mapper.from_dict({"tags": ["env=prod"]})

    @pytest.mark.parametrize(
        "data, field_name",
        [
            ({"location": "eastus", "storageProfile": "oops"}, "storageProfile"),
            ({"properties": ["not", "a", "dict"]}, "properties"),
            ({"storageProfile": {"osDisk": "Linux"}}, "osDisk"),
            ({"storageProfile": {"dataDisks": [3]}}, "dataDisks item"),
        ],
    )
    def test_nested_values_must_be_objects(self, data, field_name):
        with pytest.raises(ImageMappingError, match=f"{field_name} must be an object"):
            image_mapper.from_dict(data)

    def test_data_disks_must_be_a_list(self):
        with pytest.raises(ImageMappingError, match="dataDisks must be a list"):
            image_mapper.from_dict({"storageProfile": {"dataDisks": {"lun": 0}}})


class TestToDict:
    """Tests for to_dict."""

    def test_camel_case_output_omits_none(self):
        spec = ImageSpec(
            location="eastus",
            source_virtual_machine_id=VM_ID,
            storage_profile=ImageStorageProfile(
                os_disk=ImageDisk(os_type="Linux", os_state="Generalized", disk_size_gb=30)
            ),
        )

        assert image_mapper.to_dict(spec) == {
            "location": "eastus",
            "tags": {},
            "sourceVirtualMachine": {"id": VM_ID},
            "storageProfile": {
                "osDisk": {"osType": "Linux", "osState": "Generalized", "diskSizeGB": 30},
                "dataDisks": [],
            },
        }

    def test_output_reads_back(self):
        spec = image_mapper.from_dict(SAMPLE_IMAGE_JSON)
        assert image_mapper.from_dict(image_mapper.to_dict(spec)) == spec


class TestSdkMapping:
    """Tests for to_sdk and from_sdk."""

    def test_to_sdk(self):
        spec = image_mapper.from_dict(SAMPLE_IMAGE_JSON)

        image = image_mapper.to_sdk(spec)

        assert isinstance(image, Image)
        assert image.location == "eastus"
        assert image.tags == {"env": "prod"}
        assert image.source_virtual_machine.id == VM_ID
        assert image.storage_profile.os_disk.os_type == "Linux"
        assert image.storage_profile.os_disk.managed_disk.id.endswith("/disks/golden-os")
        assert image.storage_profile.data_disks[0].lun == 0
        assert image.hyper_v_generation == "V2"

    def test_to_sdk_without_storage_profile(self):
        image = image_mapper.to_sdk(ImageSpec(location="eastus", source_virtual_machine_id=VM_ID))

        assert image.storage_profile is None
        assert image.tags is None

    def test_to_sdk_requires_os_state(self):
        spec = ImageSpec(
            location="eastus",
            storage_profile=ImageStorageProfile(os_disk=ImageDisk(os_type="Linux")),
        )
        with pytest.raises(ImageMappingError, match="osState"):
            image_mapper.to_sdk(spec)

    def test_to_sdk_requires_data_disk_lun(self):
        spec = ImageSpec(
            location="eastus",
            storage_profile=ImageStorageProfile(data_disks=[ImageDisk(disk_size_gb=10)]),
        )
        with pytest.raises(ImageMappingError, match="lun"):
            image_mapper.to_sdk(spec)

    def test_from_sdk(self):
        spec = image_mapper.from_sdk(make_sdk_image())

        assert spec.name == "ubuntu-golden"
        assert spec.resource_group == "images-rg"
        assert spec.os_type == "Linux"
        assert spec.source_virtual_machine_id == VM_ID
        assert spec.storage_profile.os_disk.storage_account_type == "Premium_LRS"
        assert spec.storage_profile.data_disks[0].blob_uri == "https://store/vhds/data0.vhd"
