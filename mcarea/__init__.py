"""
# mcarea: reading McIDAS area files.

The library is organized as a tiny file format ORM: a format is described by
Chunks, containers of Fields declared in the order they appear on disk, and
unpacked from a Stream, that is a wrapper around the source of the bytes.

Sources are read strictly forward, from the start to the end, so that a file
on disk and a network connection can be handled in the same way: a field
with an explicit offset makes the stream skip up to it and it's an error to
go back.

The area format itself lives in mcarea.images.area:

    from mcarea.images.area import AreaFile

    with AreaFile('AREA0001') as area:
        directory = area.directory()
        image = area.region(0, 0, 100, 100, band=1)

"""
