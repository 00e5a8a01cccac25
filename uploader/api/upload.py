"""Upload form and upload endpoint."""

from string import Template

from robyn import Request, Response, status_codes

from uploader.core.router import Router
from uploader.core.settings import settings as st
from uploader.models.core import RawRequest
from uploader.services.storage import UploadStorage
from uploader.services.upload import store_upload

router = Router(__file__, prefix="")

UPLOAD_FORM = Template("""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>File Upload</title>
    <style>
        body { font-family: sans-serif; display: flex; justify-content: center; align-items: center; min-height: 100vh; background-color: #f0f2f5; margin: 0; }
        .container { background-color: #ffffff; padding: 40px; border-radius: 12px; box-shadow: 0 4px 20px rgba(0, 0, 0, 0.1); text-align: center; max-width: 500px; width: 90%; }
        form { display: flex; flex-direction: column; gap: 20px; }
        input[type="file"], input[type="submit"] { padding: 12px 20px; border: 1px solid #ddd; border-radius: 8px; font-size: 16px; width: 100%; box-sizing: border-box; }
        input[type="submit"] { background-color: #4CAF50; color: white; border: none; cursor: pointer; }
        .message { margin-top: 20px; padding: 15px; border-radius: 8px; }
        .success { background-color: #d4edda; color: #155724; }
        .error { background-color: #f8d7da; color: #721c24; }
    </style>
</head>
<body>
    <div class="container">
        <h1>Upload Your File</h1>
        <form action="$action" method="post" enctype="multipart/form-data" id="uploadForm">
            <input type="file" name="$field" id="$field" required>
            <input type="submit" value="Upload File">
        </form>
        <div id="message" class="message" style="display: none;"></div>
    </div>
    <script>
        document.getElementById('uploadForm').addEventListener('submit', async (event) => {
            event.preventDefault();
            const form = event.target;
            const message = document.getElementById('message');
            message.style.display = 'block';
            try {
                const response = await fetch(form.action, { method: form.method, body: new FormData(form) });
                const text = await response.text();
                message.className = response.ok ? 'message success' : 'message error';
                message.textContent = text || 'An unknown error occurred.';
                if (response.ok) form.reset();
            } catch (error) {
                message.className = 'message error';
                message.textContent = 'Error uploading file: ' + error.message;
            }
        });
    </script>
</body>
</html>
""")


def render_form(field_name: str, action: str = "/upload") -> str:
    return UPLOAD_FORM.substitute(field=field_name, action=action)


def read_raw_request(request: Request) -> RawRequest:
    """Snapshot the Content-Type header and body bytes of a Robyn request."""
    body = request.body
    if isinstance(body, str):
        body = body.encode("utf-8")
    return RawRequest(content_type=request.headers.get("content-type"), body=bytes(body))


@router.get("/")
async def upload_form() -> Response:
    return Response(
        status_code=status_codes.HTTP_200_OK,
        headers={"content-type": "text/html"},
        description=render_form(st.FORM_FIELD_NAME),
    )


async def save_request_upload(request: Request, storage: UploadStorage) -> str:
    stored = await store_upload(
        read_raw_request(request),
        storage,
        field_name=st.FORM_FIELD_NAME,
        default_filename=st.DEFAULT_FILENAME,
    )
    return f'File "{stored.filename}" uploaded successfully!'


@router.post("/upload", upload_field=st.FORM_FIELD_NAME)
async def upload_file(request: Request, global_dependencies) -> str:
    """Store the uploaded file in the upload directory."""
    return await save_request_upload(request, global_dependencies["state"].storage)
