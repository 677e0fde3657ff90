# ----------------
# Importations
# ----------------
import os
import tempfile

import pandas as pd
import streamlit as st

from huffcodec.container import MAGIC, compress_file, decompress_file, tree_to_dot

# ------------------------
#   Streamlit App
# ------------------------
st.set_page_config(page_title="Huffman Codec", layout="centered")
st.title("Huffman Codec Studio")

# ---------------------
#    Instructions
# ---------------------
st.subheader("1) Instructions")

st.markdown("""
*How to Use This Tool*

1. Upload a file using the button below.
2. Choose *Compress* to produce a `.huff` container, or *Decompress* to restore one.
3. Click *Process File* to start.
4. Download your file after processing.
""")
st.divider()


def show_timings(timings):
    df = pd.DataFrame(list(timings.items()), columns=["Step", "Time (s)"])
    st.divider()
    st.subheader("4) Processing Timings")
    st.table(df)


def show_compression(nodes, stats):
    st.subheader("3) Compression Summary")
    col1, col2, col3 = st.columns(3)

    if stats.get("skipped", False):
        st.warning(stats.get("note", "Compression skipped."))
        col1.metric("Original Size", f"{stats.get('original_bytes', 0)} bytes")
        col2.metric("Compressed Size", "N/A")
        col3.metric("Space Saved", "N/A")
        st.markdown(f"**Time (read)**: {stats.get('time_read', 0):.4f}s, **Total**: {stats.get('time_total', 0):.4f}s")
        return

    space_saved = stats.get('space_saved_percent')
    ratio = stats.get('compression_ratio')
    col1.metric("**Original Size**", f"{stats.get('original_bytes', 0)} bytes")
    col2.metric("**Compressed Size**", f"{stats.get('compressed_bytes', 0)} bytes")
    col3.metric("Space Saved", "N/A" if space_saved is None else f"{space_saved:.2f}%")

    if ratio is None:
        st.markdown("*Compression ratio: N/A (empty file)*")
    else:
        st.markdown(f"*Compression ratio: {ratio:.4f}*")
    st.markdown(f"*Unique symbols: {stats.get('unique_symbols', 0)}*")
    st.markdown(f"*Padding bits: {stats.get('pad_count')}*")

    show_timings({
        "Read File": stats.get('time_read', 0),
        "Build Tree": stats.get('time_tree_build', 0),
        "Make Codes": stats.get('time_codes', 0),
        "Encode & Pack": stats.get('time_pack', 0),
        "Write File": stats.get('time_write', 0),
        "Total": stats.get('time_total', 0),
    })
    st.divider()
    st.subheader("5) Huffman Tree")
    if nodes:
        st.graphviz_chart(tree_to_dot(nodes))
    else:
        st.info("No Huffman tree (empty file).")


def show_decompression(stats):
    st.subheader("3) Decompression Report")
    col1, col2, col3 = st.columns(3)
    col1.metric("Compressed file size", f"{stats['compressed_size']} bytes")
    col2.metric("Restored file size", f"{stats['restored_size']} bytes")
    col3.metric("Padding bits", f"{stats['pad_count']}")
    show_timings({
        "Read File": stats['time_read'],
        "Remove Padding": stats['time_unpad'],
        "Decode": stats['time_decode'],
        "Write File": stats['time_write'],
        "Total": stats['time_total'],
    })


# -------------------
# File Uploading
# -------------------
st.subheader("2) File Uploader")
uploaded_file = st.file_uploader("Upload a file", type=None)
if uploaded_file:
    with tempfile.NamedTemporaryFile(delete=False) as tmp:
        tmp.write(uploaded_file.read())
        tmp_path = tmp.name
    st.success(f"Uploaded file: {uploaded_file.name} ({os.path.getsize(tmp_path)} bytes)")

    with open(tmp_path, 'rb') as f:
        looks_compressed = f.read(len(MAGIC)) == MAGIC
    action = st.radio("**Choose Action**", ["Compress", "Decompress"], index=1 if looks_compressed else 0)

    if st.button("Process File"):
        st.divider()
        out_path = tmp_path + (".huff" if action == "Compress" else "_restored")
        try:
            with st.spinner(f"{action}ing file..."):
                try:
                    if action == "Compress":
                        show_compression(*compress_file(tmp_path, out_path))
                    else:
                        show_decompression(decompress_file(tmp_path, out_path))
                except ValueError as e:
                    # magic mismatch, bad header, truncated stream
                    st.error(f"Error: {e}")

            if os.path.exists(out_path):
                with open(out_path, 'rb') as f:
                    # ------------------------
                    #   File Downloading
                    # ------------------------
                    st.divider()
                    st.subheader("Download Button")
                    st.info(f"Download your {action.lower()}ed file here.")
                    st.download_button(
                        label=f"{os.path.basename(out_path)}",
                        data=f.read(),
                        file_name=os.path.basename(out_path),
                        mime="application/octet-stream"
                    )
            else:
                st.info("No output file was produced. Check the message above.")
        finally:
            os.remove(tmp_path)
            if os.path.exists(out_path):
                os.remove(out_path)
