"""
Per-tool behaviour: request shapes sent to the API and rendered results.
"""

import httpx
import pytest

from pixellab_mcp.constants import SIDESCROLLER_UNSUPPORTED_MESSAGE
from tests.conftest import make_png_base64


def respond(status=200, **kwargs):
    return lambda request: httpx.Response(status, **kwargs)


class TestCharacterTools:

    @pytest.mark.asyncio
    async def test_create_character_success(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(
            respond(json={"character_id": "C1", "background_job_id": "J1"})
        )

        result = await dispatcher.call("create_character", {"description": "wizard"})

        assert not result.is_error
        assert "C1" in result.text
        assert "J1" in result.text
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/create-character-with-4-directions"
        assert transport.last_json == {
            "description": "wizard",
            "image_size": {"width": 64, "height": 64},
        }

    @pytest.mark.asyncio
    async def test_create_character_with_eight_directions(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(
            respond(json={"character_id": "C1", "background_job_id": "J1"})
        )

        await dispatcher.call("create_character", {"description": "wizard", "n_directions": 8})

        assert transport.requests[0].url.path == "/create-character-with-8-directions"
        assert transport.last_json["async_mode"] is True

    @pytest.mark.asyncio
    async def test_create_character_without_job_id_is_error(self, make_dispatcher):
        dispatcher, _ = make_dispatcher(respond(json={"character_id": "C1"}))

        result = await dispatcher.call("create_character", {"description": "wizard"})

        assert result.is_error
        assert '"character_id": "C1"' in result.text

    @pytest.mark.asyncio
    async def test_get_8direction_character(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(
            respond(json={"data": {"character_id": "C8", "background_job_id": "J8"}})
        )

        result = await dispatcher.call("get_8direction_character", {"description": "robot"})

        assert not result.is_error
        assert "C8" in result.text
        assert transport.requests[0].url.path == "/create-character-with-8-directions"

    @pytest.mark.asyncio
    async def test_get_character_completed(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(respond(json={
            "id": "C1",
            "name": "Knight",
            "rotation_urls": {"south": "https://cdn/s.png", "north": "https://cdn/n.png"},
            "animations": [{"name": "walk", "status": "completed"}],
        }))

        result = await dispatcher.call("get_character", {"character_id": "C1"})

        assert not result.is_error
        assert "SOUTH: https://cdn/s.png" in result.text
        assert "NORTH: https://cdn/n.png" in result.text
        assert "walk: completed" in result.text
        assert transport.requests[0].url.path == "/characters/C1"

    @pytest.mark.asyncio
    async def test_get_character_processing(self, make_dispatcher):
        dispatcher, _ = make_dispatcher(respond(json={"id": "C1", "rotation_urls": {}}))

        result = await dispatcher.call("get_character", {"character_id": "C1"})

        assert not result.is_error
        assert "처리 중" in result.text

    @pytest.mark.asyncio
    async def test_list_characters_accepts_both_shapes(self, make_dispatcher):
        characters = [{"name": "Knight", "id": "C1", "status": "completed"}]
        for body in (characters, {"characters": characters}):
            dispatcher, transport = make_dispatcher(respond(json=body))

            result = await dispatcher.call("list_characters", {"limit": 5})

            assert "Knight" in result.text
            assert "C1" in result.text
            assert transport.requests[0].url.params["limit"] == "5"

    @pytest.mark.asyncio
    async def test_list_characters_empty(self, make_dispatcher):
        dispatcher, _ = make_dispatcher(respond(json=[]))

        result = await dispatcher.call("list_characters", {})

        assert not result.is_error
        assert "(0개)" in result.text

    @pytest.mark.asyncio
    async def test_zip_url_from_body(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(respond(json={"download_url": "https://cdn/c.zip"}))

        result = await dispatcher.call("get_character_zip", {"character_id": "C1"})

        assert not result.is_error
        assert "https://cdn/c.zip" in result.text
        assert transport.requests[0].url.path == "/characters/C1/zip"

    @pytest.mark.asyncio
    async def test_zip_url_from_redirect_header(self, make_dispatcher):
        dispatcher, _ = make_dispatcher(respond(302, headers={"location": "https://cdn/r.zip"}))

        result = await dispatcher.call("get_character_zip", {"character_id": "C1"})

        assert not result.is_error
        assert "https://cdn/r.zip" in result.text

    @pytest.mark.asyncio
    async def test_zip_without_url_reports_raw_response(self, make_dispatcher):
        dispatcher, _ = make_dispatcher(respond(json={"status": "ready"}))

        result = await dispatcher.call("get_character_zip", {"character_id": "C1"})

        assert not result.is_error
        assert '"status": "ready"' in result.text


class TestAnimationTools:

    @pytest.mark.asyncio
    async def test_animate_character_maps_alias(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(respond(json={"background_job_id": "J2"}))

        result = await dispatcher.call("animate_character", {"character_id": "C1", "animation": "Kick"})

        assert not result.is_error
        assert transport.requests[0].url.path == "/characters/animations"
        assert transport.last_json == {
            "character_id": "C1",
            "template_animation_id": "flying-kick",
            "action_description": "Kick animation",
            "async_mode": True,
        }

    @pytest.mark.asyncio
    async def test_animate_character_alt_passes_animation_through(self, make_dispatcher):
        dispatcher, transport = make_dispatcher()

        await dispatcher.call("animate_character_alt", {"character_id": "C1", "animation_name": "wave"})

        assert transport.requests[0].url.path == "/animate-character"
        assert transport.last_json == {
            "character_id": "C1",
            "template_animation_id": "walking",
            "animation_name": "wave",
            "action_description": "wave",
        }

    @pytest.mark.asyncio
    async def test_animate_with_text_references_character(self, make_dispatcher):
        dispatcher, transport = make_dispatcher()

        await dispatcher.call("animate_with_text", {
            "description": "knight",
            "action": "casting a spell",
            "reference_image": "C1",
        })

        body = transport.last_json
        assert body["reference_image"] == {"type": "character_id", "character_id": "C1"}
        assert body["n_frames"] == 4
        assert body["text_guidance_scale"] == 3.0

    @pytest.mark.asyncio
    async def test_animate_with_skeleton_optional_fields(self, make_dispatcher):
        dispatcher, transport = make_dispatcher()

        await dispatcher.call("animate_with_skeleton", {"reference_image": "AAAA"})
        body = transport.last_json
        assert "skeleton_keypoints" not in body
        assert "isometric" not in body
        assert body["direction"] == "south"
        assert body["reference_image"] == {"type": "base64", "base64": "AAAA", "format": "png"}

        await dispatcher.call("animate_with_skeleton", {
            "reference_image": "AAAA",
            "skeleton_keypoints": [[1, 2], [3, 4]],
            "isometric": True,
        })
        body = transport.last_json
        assert body["skeleton_keypoints"] == [[1.0, 2.0], [3.0, 4.0]]
        assert body["isometric"] is True

    @pytest.mark.asyncio
    async def test_estimate_skeleton_renders_keypoints(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(respond(json={
            "keypoints": [[1, 2.5], {"x": 3, "y": 4, "label": "HEAD"}],
        }))

        result = await dispatcher.call("estimate_skeleton", {"image": "AAAA"})

        assert "2개" in result.text
        assert "(1.00, 2.50)" in result.text
        assert "HEAD (3.00, 4.00)" in result.text
        assert transport.last_json == {"image": {"type": "base64", "base64": "AAAA", "format": "png"}}


class TestTileTools:

    @pytest.mark.asyncio
    async def test_topdown_tileset_nested_id(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(respond(json={"data": {"tileset_id": "T9"}}))

        result = await dispatcher.call("create_topdown_tileset", {"lower": "ocean", "upper": "sand"})

        assert not result.is_error
        assert "T9" in result.text
        assert transport.last_json == {
            "lower_description": "ocean",
            "upper_description": "sand",
            "transition_description": "",
            "tile_size": {"width": 16, "height": 16},
        }

    @pytest.mark.asyncio
    async def test_topdown_tileset_without_id_is_error(self, make_dispatcher):
        dispatcher, _ = make_dispatcher(respond(json={"ok": True}))

        result = await dispatcher.call("create_topdown_tileset", {"lower": "ocean", "upper": "sand"})

        assert result.is_error
        assert '"ok": true' in result.text

    @pytest.mark.asyncio
    async def test_sidescroller_makes_no_call(self, make_dispatcher):
        dispatcher, transport = make_dispatcher()

        result = await dispatcher.call("create_sidescroller_tileset", {"lower": "stone", "transition": "moss"})

        assert not result.is_error
        assert result.text == SIDESCROLLER_UNSUPPORTED_MESSAGE
        assert "unsupported" in result.text
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_isometric_tile_request(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(respond(json={"tile_id": "I1"}))

        result = await dispatcher.call("create_isometric_tile", {"description": "grass block"})

        assert "I1" in result.text
        assert transport.last_json == {
            "description": "grass block",
            "image_size": {"width": 32, "height": 32},
            "isometric_tile_size": 32,
            "isometric_tile_shape": "block",
        }

    @pytest.mark.asyncio
    async def test_tileset_status_ready_and_processing(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(respond(200, json={"status": "completed"}))
        result = await dispatcher.call("get_tileset_status", {"tileset_id": "T1"})
        assert "완료" in result.text
        assert transport.requests[0].url.path == "/tilesets/T1"

        dispatcher, _ = make_dispatcher(respond(202, json={"message": "still working"}))
        result = await dispatcher.call("get_tileset_status", {"tileset_id": "T1"})
        assert not result.is_error
        assert "처리 중" in result.text
        assert "still working" in result.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool, arguments", [
        ("get_tileset_status", {"tileset_id": "T1"}),
        ("get_isometric_tile_status", {"tile_id": "I1"}),
    ])
    @pytest.mark.parametrize("status", ["failed", "ERROR"])
    async def test_failed_status_is_error(self, make_dispatcher, tool, arguments, status):
        dispatcher, _ = make_dispatcher(respond(200, json={"status": status, "message": "generation error"}))

        result = await dispatcher.call(tool, arguments)

        assert result.is_error
        assert "generation error" in result.text
        assert "완료" not in result.text

    @pytest.mark.asyncio
    async def test_isometric_tile_status(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(respond(200, json={"download_url": "https://cdn/t.png"}))

        result = await dispatcher.call("get_isometric_tile_status", {"tile_id": "I1"})

        assert "https://cdn/t.png" in result.text
        assert transport.requests[0].url.path == "/isometric-tiles/I1"


class TestImageTools:

    @pytest.mark.asyncio
    async def test_pixflux_saves_png(self, make_dispatcher, settings):
        dispatcher, transport = make_dispatcher(
            respond(json={"image": {"type": "base64", "base64": make_png_base64()}})
        )

        result = await dispatcher.call("create_image_pixflux", {"description": "A Brave Knight!! 2024"})

        assert not result.is_error
        saved = settings.output_dir / "a_brave_knight_2024.png"
        assert saved.exists()
        assert "a_brave_knight_2024.png" in result.text
        assert "4x4 PNG" in result.text
        assert transport.last_json["text_guidance_scale"] == 8.0
        assert "negative_description" not in transport.last_json

    @pytest.mark.asyncio
    async def test_repeated_generation_does_not_overwrite(self, make_dispatcher, settings):
        dispatcher, _ = make_dispatcher(respond(json={"image": make_png_base64()}))

        await dispatcher.call("create_image_pixflux", {"description": "용사"})
        await dispatcher.call("create_image_pixflux", {"description": "마법사"})

        assert sorted(p.name for p in settings.output_dir.iterdir()) == ["image.png", "image_2.png"]

    @pytest.mark.asyncio
    async def test_save_failure_is_partial_success(self, make_dispatcher, settings):
        settings.output_dir.parent.mkdir(parents=True, exist_ok=True)
        settings.output_dir.write_text("not a directory")
        dispatcher, _ = make_dispatcher(respond(json={"image": make_png_base64()}))

        result = await dispatcher.call("create_image_pixflux", {"description": "cat"})

        assert not result.is_error
        assert "파일 저장 실패" in result.text

    @pytest.mark.asyncio
    async def test_missing_image_returns_raw_json(self, make_dispatcher):
        dispatcher, _ = make_dispatcher(respond(json={"background_job_id": "J5"}))

        result = await dispatcher.call("create_image_bitforge", {"description": "cat", "style_strength": 40})

        assert not result.is_error
        assert '"background_job_id": "J5"' in result.text

    @pytest.mark.asyncio
    async def test_inpaint_request(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(respond(json={"images": [make_png_base64()]}))

        result = await dispatcher.call("inpaint_pixel_art", {
            "description": "add a hat",
            "source_image": "SRC",
            "mask_image": "MASK",
        })

        assert not result.is_error
        body = transport.last_json
        assert body["inpainting_image"] == {"type": "base64", "base64": "SRC", "format": "png"}
        assert body["mask_image"]["base64"] == "MASK"
        assert body["text_guidance_scale"] == 3.0

    @pytest.mark.asyncio
    async def test_rotate_saves_with_view_slug(self, make_dispatcher, settings):
        dispatcher, transport = make_dispatcher(respond(json={"image": f"data:image/png;base64,{make_png_base64()}"}))

        result = await dispatcher.call("rotate_character", {"source_image": "SRC"})

        assert not result.is_error
        assert (settings.output_dir / "rotated_side_to_top_down.png").exists()
        body = transport.last_json
        assert body["from_view"] == "side"
        assert body["to_view"] == "top-down"
        assert body["view_change"] == 30
        assert body["direction_change"] == 45


class TestAccountTools:

    @pytest.mark.asyncio
    async def test_balance(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(respond(json={"credits": 120, "usage": 30}))

        result = await dispatcher.call("get_balance", None)

        assert "120" in result.text
        assert "30" in result.text
        assert transport.requests[0].url.path == "/balance"

    @pytest.mark.asyncio
    async def test_background_job_completed(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(respond(json={
            "status": "completed",
            "character_id": "C1",
            "download_url": "https://cdn/c.zip",
        }))

        result = await dispatcher.call("get_background_job", {"job_id": "J1"})

        assert "COMPLETED" in result.text
        assert "https://cdn/c.zip" in result.text
        assert transport.requests[0].url.path == "/background-jobs/J1"

    @pytest.mark.asyncio
    async def test_background_job_status_is_case_insensitive(self, make_dispatcher):
        dispatcher, _ = make_dispatcher(respond(json={"status": "COMPLETED", "download_url": "https://cdn/c.zip"}))

        result = await dispatcher.call("get_background_job", {"job_id": "J1"})

        assert "https://cdn/c.zip" in result.text

        dispatcher, _ = make_dispatcher(respond(json={"status": "Failed", "error": "out of credits"}))

        result = await dispatcher.call("get_background_job", {"job_id": "J1"})

        assert "out of credits" in result.text

    @pytest.mark.asyncio
    async def test_api_documentation_text(self, make_dispatcher):
        dispatcher, transport = make_dispatcher(respond(text="# PixelLab API"))

        result = await dispatcher.call("get_api_documentation", {})

        assert "# PixelLab API" in result.text
        assert transport.requests[0].url.path == "/llms.txt"
