# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import io

from flask import Blueprint, Response, jsonify, request, send_file
from werkzeug.datastructures import FileStorage

from filegate.application.use_cases.storage.delete_path_content import (
    DeletePathContentUseCase,
)
from filegate.application.use_cases.storage.get_path_content import GetPathContentUseCase
from filegate.application.use_cases.storage.set_path_content import SetPathContentUseCase
from filegate.application.use_cases.users.authorize_token import AuthorizeTokenUseCase
from filegate.domain.storage.entities import DirectoryListing, FileData
from filegate.interfaces.http.auth import auth_required, current_user_id
from filegate.interfaces.http.dto.auth import ResultDTO


def _uploaded_files() -> list[FileStorage]:
    # Parts without a client file name are empty file inputs, not uploads.
    return [
        upload
        for key in request.files
        for upload in request.files.getlist(key)
        if upload.filename
    ]


def _file_response(data: FileData) -> Response:
    # send_file emits an RFC 6266 filename* parameter for non-ASCII names.
    response = send_file(
        io.BytesIO(data.content),
        mimetype=data.mime_type,
        as_attachment=True,
        download_name=data.name,
        conditional=False,
        etag=False,
    )
    response.headers["Content-Length"] = str(data.size)
    return response


def _ok() -> tuple[Response, int]:
    return jsonify(ResultDTO().model_dump()), 200


class StorageController:
    def __init__(
        self,
        *,
        get_use_case: GetPathContentUseCase,
        set_use_case: SetPathContentUseCase,
        delete_use_case: DeletePathContentUseCase,
        authorize_use_case: AuthorizeTokenUseCase,
        auth_header: str = "auth",
    ) -> None:
        self._get_use_case = get_use_case
        self._set_use_case = set_use_case
        self._delete_use_case = delete_use_case
        self._authorize_use_case = authorize_use_case
        self._auth_header = auth_header

    def get_path_content(self, path: str = "") -> Response | tuple[Response, int]:
        content = self._get_use_case.execute(current_user_id(), path)
        if isinstance(content, DirectoryListing):
            return jsonify({"result": content.joined()}), 200
        return _file_response(content)

    def set_path_content(self, path: str = "") -> tuple[Response, int]:
        self._set_use_case.execute(current_user_id(), path, _uploaded_files())
        return _ok()

    def delete_path_content(self, path: str = "") -> tuple[Response, int]:
        self._delete_use_case.execute(current_user_id(), path)
        return _ok()

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("storage", __name__, url_prefix="/storage")
        guard = auth_required(self._authorize_use_case, header_name=self._auth_header)
        views = (
            ("get", self.get_path_content, ["GET"]),
            ("set", self.set_path_content, ["POST"]),
            ("delete", self.delete_path_content, ["DELETE"]),
        )
        for name, view, methods in views:
            guarded = guard(view)
            bp.add_url_rule(
                "/", endpoint=f"{name}_root", view_func=guarded, methods=methods,
                strict_slashes=False,
            )
            bp.add_url_rule(
                "/<path:path>", endpoint=name, view_func=guarded, methods=methods
            )
        return bp
