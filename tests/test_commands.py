import pytest

from pngme import FormatError, NotFoundError, Png, PngChunk, PngIOError, commands


def read(path):
    return Png.from_bytes(path.read_bytes())


def test_encode_in_place(png_file):
    chunk = commands.encode(str(png_file), 'ruSt', 'hidden message')
    image = read(png_file)
    assert len(image) == 5
    assert image.chunks[-1] == chunk
    assert image.chunks[-1].data == b'hidden message'


def test_encode_to_output_file(png_file, tmp_path):
    before = png_file.read_bytes()
    output = tmp_path / 'output.png'
    commands.encode(str(png_file), 'ruSt', 'hidden message', str(output))
    assert png_file.read_bytes() == before
    assert read(output).chunk_by_type('ruSt').data == b'hidden message'


def test_encode_replaces_existing_chunk(png_file):
    commands.encode(str(png_file), 'ruSt', 'first')
    commands.encode(str(png_file), 'ruSt', 'second')
    image = read(png_file)
    assert len(image.get_chunks_by_type('ruSt')) == 1
    assert image.chunk_by_type('ruSt').data == b'second'


def test_encode_invalid_type(png_file):
    before = png_file.read_bytes()
    with pytest.raises(FormatError):
        commands.encode(str(png_file), 'ru5t', 'message')
    assert png_file.read_bytes() == before


def test_decode(png_file):
    commands.encode(str(png_file), 'ruSt', 'hidden message')
    assert commands.decode(str(png_file), 'ruSt') == 'hidden message'


def test_decode_missing(png_file):
    assert commands.decode(str(png_file), 'ruSt') is None


def test_decode_not_text(png_file):
    image = read(png_file)
    image.append_chunk(PngChunk('ruSt', b'\xff\xfe\xfd'))
    png_file.write_bytes(image.bytes)
    with pytest.raises(FormatError, match='invalid encoding'):
        commands.decode(str(png_file), 'ruSt')


def test_remove(png_file):
    commands.encode(str(png_file), 'ruSt', 'hidden message')
    removed = commands.remove(str(png_file), 'ruSt')
    assert removed.data == b'hidden message'
    assert read(png_file).chunk_by_type('ruSt') is None


def test_remove_missing(png_file):
    before = png_file.read_bytes()
    with pytest.raises(NotFoundError):
        commands.remove(str(png_file), 'ruSt')
    assert png_file.read_bytes() == before


def test_print_chunks(png_file):
    summary = commands.print_chunks(str(png_file))
    assert 'PNG file with 4 chunks' in summary
    assert 'Type: tEXt' in summary


def test_load_corrupted_file(png_file):
    png_file.write_bytes(b'not a png at all')
    with pytest.raises(FormatError, match='bad signature'):
        commands.print_chunks(str(png_file))


def test_load_missing_file(tmp_path):
    with pytest.raises(PngIOError):
        commands.decode(str(tmp_path / 'missing.png'), 'ruSt')


def test_cant_write_back_to_url(image):
    with pytest.raises(PngIOError, match="can't write to a url"):
        commands.save(image, 'https://example.com/image.png')


def test_write_error(image, tmp_path):
    with pytest.raises(PngIOError):
        commands.save(image, str(tmp_path / 'missing_dir' / 'image.png'))
